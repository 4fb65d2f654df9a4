from eventboard.core import clock

from conftest import FROZEN_NOW


def test_next_edit_timestamp_uses_current_time(frozen_clock):
    assert clock.next_edit_timestamp(FROZEN_NOW - 3600) == FROZEN_NOW


def test_next_edit_timestamp_runs_ahead_of_clock_within_one_second(frozen_clock):
    first = clock.next_edit_timestamp(FROZEN_NOW)
    second = clock.next_edit_timestamp(first)

    assert first == FROZEN_NOW + 1
    assert second == FROZEN_NOW + 2
    assert second > clock.unix_now()
