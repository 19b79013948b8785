#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

from types import SimpleNamespace

import pytest
import Xlib.X
import Xlib.Xatom

import pywinhint._discovery as discovery
from pywinhint import (EventFinder, HintSet, PollFinder, SizeMode, SpawnError, Strategy, WindowMatcher, byClass,
                       byPid, launch, packIcon)


class Sleeper:

    def __init__(self, onSleep=None):
        self.total = 0.0
        self.calls = 0
        self.onSleep = onSleep

    def __call__(self, seconds):
        self.total += seconds
        self.calls += 1
        if self.onSleep:
            self.onSleep(self.calls)


def test_poll_finds_window_created_later(session):

    def createWindow(calls):
        if calls == 3:
            win = session.addWindow(50)
            session.setPid(win, 99)

    sleeper = Sleeper(createWindow)
    finder = PollFinder(session, WindowMatcher(session, byPid(99)), interval=0.5, initialDelay=0.1, sleep=sleeper)
    assert finder.find(10) == 50
    assert finder.attempts == 3


def test_poll_timeout_is_bounded(session):
    session.addWindow(50)
    sleeper = Sleeper()
    finder = PollFinder(session, WindowMatcher(session, byPid(99)), interval=0.5, initialDelay=0.1, sleep=sleeper)

    assert finder.find(3) is None
    assert finder.attempts == 6
    assert sleeper.total <= 3 + 0.1


def test_poll_zero_budget_walks_once(session):
    finder = PollFinder(session, WindowMatcher(session, byPid(99)), initialDelay=0, sleep=Sleeper())
    assert finder.find(0) is None
    assert finder.attempts == 1


def test_event_finder_checks_only_reparented_window(session):
    frame = session.addWindow(70)
    client = session.addWindow(71, parent=frame)
    session.setProp(client, Xlib.Xatom.WM_CLASS, 8, b"xterm\x00XTerm\x00")
    other = session.addWindow(80)
    session.setProp(other, Xlib.Xatom.WM_CLASS, 8, b"xclock\x00XClock\x00")

    session.events.append(SimpleNamespace(type=Xlib.X.CreateNotify, window=SimpleNamespace(id=client)))
    session.reparent(other)
    session.reparent(frame)
    session.reparent(client)

    finder = EventFinder(session, WindowMatcher(session, byClass("XTerm")), clock=session.clock)
    assert finder.find(10) == client
    assert finder.events == 4
    assert session.masks == [Xlib.X.SubstructureNotifyMask, Xlib.X.NoEventMask]
    assert session.treeQueries == 0


def test_event_finder_times_out(session):
    finder = EventFinder(session, WindowMatcher(session, byPid(1)), clock=session.clock)
    assert finder.find(5) is None
    assert session.now == pytest.approx(5)
    assert session.masks[-1] == Xlib.X.NoEventMask


def test_event_finder_unrelated_events_do_not_extend_budget(session):
    for winId in range(200, 210):
        session.addWindow(winId)
        session.reparent(winId)
    finder = EventFinder(session, WindowMatcher(session, byPid(1)), clock=session.clock)
    assert finder.find(0.05) is None
    assert session.now < 0.05 + 0.01 * 10


class FakePopen:

    def __init__(self, argv):
        self.argv = argv
        self.pid = 4321


@pytest.fixture
def fakeSpawn(monkeypatch):
    spawned = []

    def popen(argv):
        proc = FakePopen(argv)
        spawned.append(proc)
        return proc

    monkeypatch.setattr(discovery.subprocess, "Popen", popen)
    monkeypatch.setattr(discovery.time, "sleep", Sleeper())
    return spawned


def test_launch_applies_hints_to_process_window(session, fakeSpawn):
    win = session.addWindow(60)
    session.setPid(win, 4321)

    result = launch("xterm", ["-e", "top"], HintSet(above=True), wait=2, session=session)

    assert fakeSpawn[0].argv == ["xterm", "-e", "top"]
    assert result.pid == 4321
    assert result.window == win
    assert result.failures == []
    assert session.requests[0][:2] == ("SendEvent", win)
    assert not session.closed


def test_launch_timeout_applies_nothing(session, fakeSpawn):
    result = launch("xterm", hints=HintSet(above=True), wait=1, session=session)
    assert result.window is None
    assert session.requests == []


def test_launch_event_strategy_listens_before_spawn(session, fakeSpawn):
    win = session.addWindow(60)
    session.setPid(win, 4321, icon=False)
    session.reparent(win)

    result = launch("xterm", hints=HintSet(skipTaskbar=True), wait=2, strategy=Strategy.EVENT, session=session)

    assert result.window == win
    assert session.masks[0] == Xlib.X.SubstructureNotifyMask
    assert session.masks[-1] == Xlib.X.NoEventMask


def test_launch_by_class(session, fakeSpawn):
    win = session.addWindow(60)
    session.setProp(win, Xlib.Xatom.WM_CLASS, 8, b"code\x00Code\x00")

    result = launch("code", hints=HintSet(), matchSpec=byClass("Code"), wait=1, session=session)
    assert result.window == win


def test_launch_reports_hint_failures(session, fakeSpawn):
    win = session.addWindow(60)
    session.setPid(win, 4321)
    session.failOn.append("SendEvent")

    result = launch("xterm", hints=HintSet(size=SizeMode.MAX, noDecoration=True), wait=1, session=session)

    assert result.window == win
    assert [f.hint for f in result.failures] == ["size"]
    assert [r[0] for r in session.requests] == ["ChangeProperty"]


def test_launch_spawn_failure(session, monkeypatch):

    def popen(argv):
        raise FileNotFoundError(2, "No such file or directory", argv[0])

    monkeypatch.setattr(discovery.subprocess, "Popen", popen)
    with pytest.raises(SpawnError):
        launch("does-not-exist", session=session)


def test_reapply_repeats_icon_and_size(session):
    icon = packIcon(1, 1, bytes(4))
    sleeper = Sleeper()
    rounds = discovery.reapply(session, 60, HintSet(icon=icon, size=SizeMode.FULLSCREEN, above=True), 2,
                               interval=0.5, sleep=sleeper)
    assert rounds == 4
    assert sleeper.total == pytest.approx(2)
    assert [r[0] for r in session.requests] == ["ChangeProperty", "SendEvent"] * 4


def test_reapply_nothing_to_do(session):
    assert discovery.reapply(session, 60, HintSet(above=True), 5, sleep=Sleeper()) == 0
    assert session.requests == []
