"""Date to block lookup and weekly epoch helpers."""

from collections.abc import Callable, Iterable
from datetime import date, datetime, time, timedelta, timezone
from typing import TYPE_CHECKING

from cauldron_refund.errors import ReadFailure

if TYPE_CHECKING:
    from web3 import Web3  # pragma: no cover

THURSDAY = 3  # datetime.weekday()


def as_utc_datetime(value: str | date | datetime) -> datetime:
    """Parse an ISO date/datetime (or take a date/datetime); naive values are UTC."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    if not isinstance(value, datetime):
        value = datetime.combine(value, time(0, 0))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def find_thursday_after(value: str | date | datetime) -> datetime:
    """
    First Thursday 00:00 UTC after the given day.

    A Thursday maps to the Thursday of the following week.
    """
    day = as_utc_datetime(value).date()
    days_ahead = (THURSDAY - day.weekday()) % 7 or 7
    return datetime.combine(day + timedelta(days=days_ahead), time(0, 0), tzinfo=timezone.utc)


def iter_weekly_epochs(since: str | date | datetime, until: datetime) -> Iterable[datetime]:
    """Thursday epoch starts after `since`, up to and including `until`."""
    cur = find_thursday_after(since)
    while cur <= until:
        yield cur
        cur += timedelta(weeks=1)


def find_closest_block(get_timestamp: Callable[[int], int], latest_block: int, target_ts: int) -> int:
    """
    Binary search for the lowest block whose timestamp is >= target_ts.

    Block timestamps are assumed non-decreasing with height.
    """
    if get_timestamp(latest_block) < target_ts:
        raise ValueError(f"timestamp {target_ts} is after the latest block {latest_block}")
    lo, hi = 0, latest_block
    while lo < hi:
        mid = (lo + hi) // 2
        if get_timestamp(mid) >= target_ts:
            hi = mid
        else:
            lo = mid + 1
    return lo


def block_timestamp(w3: "Web3", block_identifier: int | str) -> int:
    try:
        return int(w3.eth.get_block(block_identifier)["timestamp"])
    except Exception as ex:  # pylint: disable=broad-exception-caught
        raise ReadFailure("eth_getBlockByNumber", "-", block_identifier, cause=ex) from ex


def latest_block_number(w3: "Web3") -> int:
    try:
        return int(w3.eth.block_number)
    except Exception as ex:  # pylint: disable=broad-exception-caught
        raise ReadFailure("eth_blockNumber", "-", "latest", cause=ex) from ex


def locate_block(w3: "Web3", target_ts: int, *, latest_block: int | None = None) -> int:
    """First block at or after `target_ts` (unix seconds)."""
    latest = latest_block_number(w3) if latest_block is None else latest_block
    return find_closest_block(lambda n: block_timestamp(w3, n), latest, target_ts)
