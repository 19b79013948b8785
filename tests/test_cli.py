#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest
from PIL import Image

import pywinhint._cli as cli
from pywinhint import (DisplayError, Edge, HintError, LaunchResult, MatchKind, MinimizeMode, Props, SizeMode,
                       Strategy)


@pytest.fixture
def launched(monkeypatch):
    calls = []
    result = {"value": LaunchResult(1234, 0x400001, [])}

    def fakeLaunch(command, args, hints, **kwargs):
        calls.append((command, args, hints, kwargs))
        if isinstance(result["value"], Exception):
            raise result["value"]
        return result["value"]

    monkeypatch.setattr(cli, "launch", fakeLaunch)
    return calls, result


def test_defaults(launched):
    calls, _ = launched
    assert cli.main(["-c", "xterm"]) == cli.EXIT_OK

    command, args, hints, kwargs = calls[0]
    assert command == "xterm"
    assert args == []
    assert hints.size is None and hints.windowType is None and hints.geometry is None
    assert not (hints.above or hints.noDecoration or hints.skipTaskbar)
    assert kwargs["matchSpec"] is None
    assert kwargs["wait"] == 10
    assert kwargs["strategy"] == Strategy.POLL
    assert kwargs["reapplySeconds"] == 0


def test_all_hints(launched):
    calls, _ = launched
    argv = ["-s", "min", "--min-mode", "hidden", "-a", "-d", "-t", "splash", "-g", "200x200+100-100", "-k",
            "--class", "XTerm", "--strategy", "event", "-w", "5", "--reapply", "2.5",
            "-c", "xterm", "--", "-fa", "Monospace"]
    assert cli.main(argv) == cli.EXIT_OK

    command, args, hints, kwargs = calls[0]
    assert args == ["-fa", "Monospace"]
    assert hints.size == SizeMode.MIN
    assert hints.minimizeMode == MinimizeMode.HIDDEN
    assert hints.above and hints.noDecoration and hints.skipTaskbar
    assert hints.windowType == Props.WindowType.SPLASH
    assert hints.geometry.size == (200, 200)
    assert hints.geometry.offset == (Edge.NEAR, 100, Edge.FAR, 100)
    assert kwargs["matchSpec"].kind == MatchKind.CLASS and kwargs["matchSpec"].value == "XTerm"
    assert kwargs["strategy"] == Strategy.EVENT
    assert kwargs["wait"] == 5
    assert kwargs["reapplySeconds"] == 2.5


def test_program_args_without_separator(launched):
    calls, _ = launched
    cli.main(["--name", "My Title", "-c", "feh", "image.png"])
    command, args, hints, kwargs = calls[0]
    assert args == ["image.png"]
    assert kwargs["matchSpec"].kind == MatchKind.NAME


@pytest.mark.parametrize("argv", [
    [],
    ["-c", "xterm", "-g", "200x"],
    ["-c", "xterm", "-s", "huge"],
    ["-c", "xterm", "-t", "window"],
    ["--class", "a", "--name", "b", "-c", "xterm"],
    ["-c", "xterm", "-w", "-1"],
])
def test_usage_errors(launched, argv):
    with pytest.raises(SystemExit) as err:
        cli.main(argv)
    assert err.value.code == cli.EXIT_USAGE
    assert launched[0] == []


def test_icon_is_loaded_before_launch(launched, tmp_path):
    calls, _ = launched
    path = tmp_path / "icon.png"
    Image.new("RGBA", (2, 2), (0, 0, 0, 0)).save(path)

    assert cli.main(["-i", str(path), "-c", "xterm"]) == cli.EXIT_OK
    assert calls[0][2].icon.length == 6


def test_missing_icon_is_fatal(launched, tmp_path):
    assert cli.main(["-i", str(tmp_path / "nope.png"), "-c", "xterm"]) == cli.EXIT_ERROR
    assert launched[0] == []


def test_timeout_exit_code(launched):
    launched[1]["value"] = LaunchResult(1234, None, [])
    assert cli.main(["-c", "xterm"]) == cli.EXIT_TIMEOUT


def test_hint_failure_exit_code(launched):
    launched[1]["value"] = LaunchResult(1234, 0x400001, [HintError("icon", "BadWindow")])
    assert cli.main(["-c", "xterm"]) == cli.EXIT_HINT_FAILED


def test_fatal_error_exit_code(launched):
    launched[1]["value"] = DisplayError("Cannot open display :99")
    assert cli.main(["-c", "xterm"]) == cli.EXIT_ERROR


def test_window_types_cover_registry():
    assert cli.WINDOW_TYPES == [t.name.lower() for t in Props.WindowType]
    assert "normal" in cli.WINDOW_TYPES and "dock" in cli.WINDOW_TYPES


@pytest.fixture
def forked(monkeypatch):
    calls = []
    child = {"pid": 0}

    def fork():
        calls.append("fork")
        return child["pid"]

    monkeypatch.setattr(cli.os, "fork", fork)
    monkeypatch.setattr(cli.os, "setsid", lambda: calls.append("setsid"))
    return calls, child


def test_detach_parent_returns_at_once(launched, forked):
    calls, child = forked
    child["pid"] = 5678

    assert cli.main(["--detach", "-c", "xterm"]) == cli.EXIT_OK
    assert calls == ["fork"]
    assert launched[0] == []


def test_detach_child_carries_on(launched, forked):
    calls, _ = forked
    launched[1]["value"] = LaunchResult(1234, None, [])

    assert cli.main(["--detach", "-c", "xterm"]) == cli.EXIT_TIMEOUT
    assert calls == ["fork", "setsid"]
    assert len(launched[0]) == 1


def test_detach_reports_icon_errors_before_forking(launched, forked, tmp_path):
    calls, _ = forked
    assert cli.main(["--detach", "-i", str(tmp_path / "nope.png"), "-c", "xterm"]) == cli.EXIT_ERROR
    assert calls == []
    assert launched[0] == []
