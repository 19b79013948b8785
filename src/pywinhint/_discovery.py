#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import math
import subprocess
import time
from typing import Callable, Optional, List, Sequence

import Xlib.X

from ._errors import HintError, SpawnError
from ._hints import applyHints, setIcon, setSizeMode
from ._icon import loadIcon
from ._matcher import WindowMatcher, byPid, findInTree
from ._structs import HintSet, LaunchResult, MatchSpec, Strategy
from ._xsession import XSession

logger = logging.getLogger(__name__)

# Target programs need some time to create their windows. Seconds between tree walks
POLL_INTERVAL = 0.5
INITIAL_DELAY = 0.1
DEFAULT_WAIT = 10


class PollFinder:
    """
    Look for the target window by walking the whole window tree every ''interval'' seconds.

    The number of walks is derived from the wait budget: ceil(budget / interval), at least one.
    """

    def __init__(self, session, matcher: WindowMatcher, interval: float = POLL_INTERVAL,
                 initialDelay: float = INITIAL_DELAY, sleep: Optional[Callable[[float], None]] = None):

        self.session = session
        self.matcher = matcher
        self.interval = interval
        self.initialDelay = initialDelay
        self._sleep = sleep or time.sleep
        self.attempts = 0

    def find(self, budget: float) -> Optional[int]:
        maxAttempts = max(1, math.ceil(budget / self.interval))
        self.attempts = 0
        if self.initialDelay > 0:
            self._sleep(self.initialDelay)
        while True:
            self.attempts += 1
            winId = findInTree(self.session, self.matcher)
            if winId is not None:
                logger.debug("Found window 0x%x after %d attempt(s)", winId, self.attempts)
                return winId
            if self.attempts >= maxAttempts:
                return None
            self._sleep(self.interval)


class EventFinder:
    """
    Look for the target window by listening to structure changes on root.

    Window Managers reparent new top-level windows into their frames right after they are mapped, so only the
    window of each ReparentNotify event is checked (not its children).
    """

    def __init__(self, session, matcher: WindowMatcher, clock: Optional[Callable[[], float]] = None):

        self.session = session
        self.matcher = matcher
        self._clock = clock or time.monotonic
        self.events = 0

    def find(self, budget: float) -> Optional[int]:
        self.events = 0
        start = self._clock()
        self.session.selectRootEvents(Xlib.X.SubstructureNotifyMask)
        try:
            while True:
                remaining = budget - (self._clock() - start)
                if remaining <= 0:
                    return None
                event = self.session.nextEvent(remaining)
                if event is None:
                    continue
                self.events += 1
                if event.type != Xlib.X.ReparentNotify:
                    continue
                winId: int = event.window.id
                if self.matcher.matches(winId):
                    logger.debug("Found window 0x%x after %d event(s)", winId, self.events)
                    return winId
        finally:
            self.session.selectRootEvents(Xlib.X.NoEventMask)


def makeFinder(strategy: Strategy, session, matchSpec: MatchSpec, **kwargs):
    """
    Build the finder for given strategy. The icon heuristic of PID matching is only used when polling, since
    reparented windows rarely have their icon set yet.

    :param strategy: POLL or EVENT
    :param session: XSession to use
    :param matchSpec: criteria to identify the target window
    :return: PollFinder or EventFinder
    """
    if strategy == Strategy.EVENT:
        return EventFinder(session, WindowMatcher(session, matchSpec, requireIcon=False), **kwargs)
    return PollFinder(session, WindowMatcher(session, matchSpec, requireIcon=True), **kwargs)


def spawn(command: str, args: Sequence[str] = ()) -> subprocess.Popen:
    """
    Start target program. Its output is not captured

    :param command: program to run
    :param args: arguments for the program
    :return: Popen object
    """
    try:
        proc = subprocess.Popen([command, *args])
    except (OSError, ValueError) as err:
        raise SpawnError("Failed to start %s: %s" % (command, err)) from err
    logger.info("Started %s (pid %d)", command, proc.pid)
    return proc


def reapply(session, winId: int, hints: HintSet, seconds: float, interval: float = POLL_INTERVAL,
            sleep: Optional[Callable[[float], None]] = None) -> int:
    """
    Apply icon and size hints again every ''interval'' seconds during ''seconds'' seconds, for Window Managers
    (and toolkits) which reset them right after the window is shown. Errors are logged, not raised.

    :return: number of rounds performed
    """
    if hints.icon is None and hints.size is None:
        return 0
    sleep = sleep or time.sleep
    rounds = int(seconds / interval)
    for _ in range(rounds):
        sleep(interval)
        if hints.icon is not None:
            try:
                setIcon(session, winId, hints.icon)
            except HintError as err:
                logger.warning("%s", err)
        if hints.size is not None:
            try:
                setSizeMode(session, winId, hints.size, hints.minimizeMode)
            except HintError as err:
                logger.warning("%s", err)
    return rounds


def launch(command: str, args: Sequence[str] = (), hints: HintSet = HintSet(), iconPath: Optional[str] = None,
           matchSpec: Optional[MatchSpec] = None, wait: float = DEFAULT_WAIT, strategy: Strategy = Strategy.POLL,
           reapplySeconds: float = 0, displayName: Optional[str] = None, session=None) -> LaunchResult:
    """
    Run a program, wait for its window and apply given hints to it.

    :param command: program to run
    :param args: program arguments
    :param hints: HintSet struct with requested hints
    :param iconPath: image file to use as icon. Decoded before anything else, overrides hints.icon
    :param matchSpec: how to identify the window. Defaults to _NET_WM_PID of the spawned process
    :param wait: max seconds to wait for the window
    :param strategy: POLL (walk window tree) or EVENT (listen to reparent events)
    :param reapplySeconds: keep re-applying icon/size hints for these seconds (bounded by the unused wait)
    :param displayName: X display to connect to (defaults to $DISPLAY)
    :param session: already open XSession to use instead of opening a new one
    :return: LaunchResult struct. window is None if it wasn't found in time
    """
    if iconPath is not None:
        hints = hints._replace(icon=loadIcon(iconPath))

    ownSession = session is None
    if ownSession:
        session = XSession(displayName)
    try:
        if strategy == Strategy.EVENT:
            # listen before spawning, so no reparent event is missed
            session.selectRootEvents(Xlib.X.SubstructureNotifyMask)
        start = time.monotonic()
        proc = spawn(command, args)
        if matchSpec is None:
            matchSpec = byPid(proc.pid)
        finder = makeFinder(strategy, session, matchSpec)
        winId = finder.find(wait)
        if winId is None:
            logger.warning("No window matching %s=%s appeared within %s seconds",
                           matchSpec.kind.value, matchSpec.value, wait)
            return LaunchResult(proc.pid, None, [])

        logger.info("Window 0x%x found", winId)
        failures: List[Exception] = list(applyHints(session, winId, hints))
        if reapplySeconds > 0:
            grace = min(reapplySeconds, max(0.0, wait - (time.monotonic() - start)))
            reapply(session, winId, hints, grace)
        return LaunchResult(proc.pid, winId, failures)
    finally:
        if ownSession:
            session.close()
