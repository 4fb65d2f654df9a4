# Unix epoch timestamps (seconds)

import time


def unix_now() -> int:
    return int(time.time())


def next_edit_timestamp(previous: int) -> int:
    """
    Timestamp for an edit that must land strictly after `previous`.

    Timestamps have one second resolution, so two writes within the same
    second would otherwise share a value. Under a burst of edits the result
    runs ahead of unix_now() by up to the number of extra edits.
    """
    return max(unix_now(), previous + 1)
