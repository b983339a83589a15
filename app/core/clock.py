"""Canonical clock for date comparisons."""

from datetime import UTC, date, datetime, timedelta


def utc_now() -> datetime:
    """Current timestamp in UTC."""
    return datetime.now(UTC)


def utc_today() -> date:
    """Current calendar date in UTC.

    Upcoming/history partitions and consultation dates are all computed
    against this date so that results do not depend on the server timezone.
    """
    return utc_now().date()


def utc_yesterday() -> date:
    """Calendar date before :func:`utc_today`."""
    return utc_today() - timedelta(days=1)
