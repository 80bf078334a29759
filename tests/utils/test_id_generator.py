"""Tests for unique id allocation."""

from __future__ import annotations

from todolist.utils.id_generator import IdGenerator, epoch_millis


def test_follows_clock_when_it_moves():
    ticks = iter([1000, 2000, 3000])
    gen = IdGenerator(lambda: next(ticks))
    assert [gen.next_id() for _ in range(3)] == [1000, 2000, 3000]


def test_same_tick_still_unique():
    gen = IdGenerator(lambda: 1000)
    assert [gen.next_id() for _ in range(4)] == [1000, 1001, 1002, 1003]


def test_clock_going_backwards():
    ticks = iter([5000, 10])
    gen = IdGenerator(lambda: next(ticks))
    assert gen.next_id() == 5000
    assert gen.next_id() == 5001


def test_observe_skips_past_existing_ids():
    gen = IdGenerator(lambda: 1000)
    gen.observe([5, 99999, "abc", True])
    assert gen.last == 99999
    assert gen.next_id() == 100000


def test_epoch_millis_is_current():
    assert epoch_millis() > 1_700_000_000_000
