#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import os
from typing import Optional, List, Sequence

from ._discovery import DEFAULT_WAIT, launch
from ._errors import GeometryError, PyWinHintError
from ._geometry import parseGeometry
from ._icon import loadIcon
from ._matcher import byClass, byName
from ._props import Props
from ._structs import Geometry, HintSet, MatchSpec, MinimizeMode, SizeMode, Strategy

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2  # argparse
EXIT_TIMEOUT = 3
EXIT_HINT_FAILED = 4

WINDOW_TYPES = [t.name.lower() for t in Props.WindowType]


def _geometry(text: str) -> Geometry:
    try:
        return parseGeometry(text)
    except GeometryError as err:
        raise argparse.ArgumentTypeError(str(err))


def buildParser() -> argparse.ArgumentParser:
    from . import __version__

    parser = argparse.ArgumentParser(
        prog="pywinhint",
        description="Run an X11 program and apply window manager hints to its window once it shows up",
        epilog="Example: pywinhint -s max -i app.png -c xterm -- -fa Monospace"
    )
    parser.add_argument("-i", "--icon", help="icon file (any format supported by Pillow)")
    parser.add_argument("-s", "--size", choices=[s.value for s in SizeMode], help="window size")
    parser.add_argument("--min-mode", choices=[m.value for m in MinimizeMode], default=MinimizeMode.ICONIFY.value,
                        help="how to minimize: legacy iconify message or hidden state (default: %(default)s)")
    parser.add_argument("-a", "--above", action="store_true", help="keep window above others")
    parser.add_argument("-d", "--no-decoration", action="store_true", help="remove window decoration")
    parser.add_argument("-t", "--type", choices=WINDOW_TYPES, help="window type")
    parser.add_argument("-g", "--geometry", type=_geometry,
                        help="window geometry: [<width>x<height>][{+-}<x>{+-}<y>]")
    parser.add_argument("-k", "--skip-taskbar", action="store_true", help="hide window from taskbar")
    match = parser.add_mutually_exclusive_group()
    match.add_argument("--class", dest="klass", metavar="CLASS",
                       help="find window by WM_CLASS instead of process id")
    match.add_argument("--name", metavar="TITLE", help="find window by title (WM_NAME) instead of process id")
    parser.add_argument("--strategy", choices=[s.value for s in Strategy], default=Strategy.POLL.value,
                        help="poll the window tree or listen to reparent events (default: %(default)s)")
    parser.add_argument("-w", "--wait", type=int, default=DEFAULT_WAIT,
                        help="max seconds to wait for the program window (default: %(default)s)")
    parser.add_argument("--reapply", type=float, default=0, metavar="SECONDS",
                        help="keep re-applying icon and size for these seconds, within the wait time")
    parser.add_argument("--display", help="X display to use (defaults to $DISPLAY)")
    parser.add_argument("--detach", action="store_true", help="return immediately and work in background")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more output (-vv for debug)")
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    parser.add_argument("-c", "--command", required=True, help="X11 program to run")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="arguments for the program")
    return parser


def setupLogging(verbosity: int):
    level = logging.WARNING
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(name)s: %(levelname)s: %(message)s")


def hintsFromArgs(args: argparse.Namespace) -> HintSet:
    return HintSet(
        icon=None,
        size=SizeMode(args.size) if args.size else None,
        above=args.above,
        noDecoration=args.no_decoration,
        windowType=Props.WindowType[args.type.upper()] if args.type else None,
        geometry=args.geometry,
        skipTaskbar=args.skip_taskbar,
        minimizeMode=MinimizeMode(args.min_mode)
    )


def matchFromArgs(args: argparse.Namespace) -> Optional[MatchSpec]:
    if args.klass is not None:
        return byClass(args.klass)
    if args.name is not None:
        return byName(args.name)
    return None


def detach() -> bool:
    """
    Fork and let the child go on in a new session

    :return: ''True'' in the parent process, ''False'' in the child
    """
    if os.fork() > 0:
        return True
    os.setsid()
    return False


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = buildParser()
    args = parser.parse_args(argv)
    setupLogging(args.verbose)

    progArgs: List[str] = list(args.args)
    if progArgs and progArgs[0] == "--":
        progArgs = progArgs[1:]
    if args.wait < 0:
        parser.error("--wait must be 0 or greater")

    hints = hintsFromArgs(args)
    try:
        if args.icon:
            hints = hints._replace(icon=loadIcon(args.icon))
    except PyWinHintError as err:
        logger.error("%s", err)
        return EXIT_ERROR

    if args.detach and detach():
        return EXIT_OK

    try:
        result = launch(args.command, progArgs, hints, matchSpec=matchFromArgs(args), wait=args.wait,
                        strategy=Strategy(args.strategy), reapplySeconds=args.reapply, displayName=args.display)
    except PyWinHintError as err:
        logger.error("%s", err)
        return EXIT_ERROR

    if result.window is None:
        return EXIT_TIMEOUT
    if result.failures:
        return EXIT_HINT_FAILED
    return EXIT_OK
