from __future__ import annotations

import datetime as dt
import logging
from typing import Sequence

from .model import DateWindow, Event, WindowSelection

logger = logging.getLogger(__name__)


def candidate_window(today: dt.date, *, years_back: int, years_forward: int) -> DateWindow:
    if years_back < 0 or years_forward < 0:
        raise ValueError(f"years_back/years_forward must be >= 0 (got {years_back}, {years_forward})")
    # The color table reaches one year past the window, the month axis one month past it.
    if today.year - years_back < dt.MINYEAR or today.year + years_forward >= dt.MAXYEAR:
        raise ValueError(f"Window {today.year - years_back}..{today.year + years_forward} is outside the supported years")
    return DateWindow.from_years(today.year - years_back, today.year + years_forward)


def data_window(events: Sequence[Event]) -> DateWindow | None:
    """Window spanning every dated event: Jan 1 of the earliest year to Jan 1 after the latest."""
    years = [e.year for e in events if e.year is not None]
    if not years:
        return None
    return DateWindow.from_years(min(years), max(years) + 1)


def select_window(
    events: Sequence[Event],
    *,
    today: dt.date,
    years_back: int = 1,
    years_forward: int = 8,
) -> WindowSelection | None:
    candidate = candidate_window(today, years_back=years_back, years_forward=years_forward)
    in_window = [e for e in events if e.year is not None and candidate.contains_year(e.year)]
    if in_window:
        logger.debug(
            "Using configured window %s..%s (%d of %d events)",
            candidate.min,
            candidate.max,
            len(in_window),
            len(events),
        )
        return WindowSelection(window=candidate, events=tuple(in_window), fallback=False)

    # Nothing falls inside the configured look-back/look-forward range: show the data as it is.
    fallback = data_window(events)
    if fallback is None:
        logger.debug("No dated events; window is undefined")
        return None
    logger.debug("No events in %s..%s; falling back to data window %s..%s", candidate.min, candidate.max, fallback.min, fallback.max)
    return WindowSelection(window=fallback, events=tuple(events), fallback=True)
