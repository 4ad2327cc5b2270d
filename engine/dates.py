# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""Calendar helpers. All streak/grace math runs on local YYYY-MM-DD strings."""

from datetime import date, datetime, time, timedelta
from typing import Union

When = Union[datetime, date, None]


def resolve_now(now: When = None) -> datetime:
    """Local wall clock, or the given moment. A bare date means its noon."""
    if now is None:
        return datetime.now()
    if isinstance(now, datetime):
        return now
    return datetime.combine(now, time(12, 0))


def day_str(d: date) -> str:
    return d.isoformat()


def today_str(now: When = None) -> str:
    return day_str(resolve_now(now).date())


def yesterday_str(now: When = None) -> str:
    return day_str(resolve_now(now).date() - timedelta(days=1))


def parse_day(value: str) -> date:
    """Accept 'YYYY-MM-DD' or a full ISO timestamp."""
    return date.fromisoformat(value[:10])


def shift_day(value: str, days: int) -> str:
    return day_str(parse_day(value) + timedelta(days=days))


def days_between(earlier: str, later: str) -> int:
    """Whole calendar days from earlier to later (negative if reversed)."""
    return (parse_day(later) - parse_day(earlier)).days


def parse_timestamp(value: str) -> datetime:
    """ISO timestamp as naive local time. Offsets are dropped, not converted."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value).replace(tzinfo=None)
