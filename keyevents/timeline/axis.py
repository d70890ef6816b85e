from __future__ import annotations

import datetime as dt
import logging
import math
from dataclasses import dataclass

from .model import DateWindow, Granularity, PlotGeometry, Tick
from .year_colors import YearColors

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.25
LOGICAL_Y_DOMAIN = (-105.0, 105.0)

BOUNDARY_TICK_RADIUS = 27.0
TICK_RADIUS = 10.0
BOUNDARY_TICK_STROKE = "#868686"
BOUNDARY_TICK_FILL = "#bfbfbf"

MONTH_ABBREV = (None, "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class AxisScale:
    domain: tuple[dt.date, dt.date]
    granularity: Granularity
    pixel_range: tuple[float, float]
    y_range: tuple[float, float]  # (bottom_px, top_px) for LOGICAL_Y_DOMAIN

    def x_of(self, date: dt.date | None) -> float:
        """Linear time → x. Dates outside the domain (or missing) have no position and map to NaN."""
        if date is None:
            return math.nan
        start, end = self.domain
        if date < start or date > end:
            return math.nan
        left, right = self.pixel_range
        span_days = end.toordinal() - start.toordinal()
        if span_days <= 0:
            return left
        return left + (date.toordinal() - start.toordinal()) / span_days * (right - left)

    def y_of(self, logical: float) -> float:
        lo, hi = LOGICAL_Y_DOMAIN
        bottom, top = self.y_range
        return bottom + (logical - lo) / (hi - lo) * (top - bottom)


def years_span(start: dt.date, end: dt.date) -> int:
    days = abs((end - start).days)
    # Half rounds up; Python round() would bank to even.
    return int(math.floor(days / DAYS_PER_YEAR + 0.5))


def choose_granularity(window: DateWindow) -> Granularity:
    return "month" if years_span(window.min, window.max) <= 1 else "year"


def add_months(date: dt.date, months: int) -> dt.date:
    """First day of the month `months` away from `date` (negative values walk backwards)."""
    total = date.year * 12 + (date.month - 1) + months
    return dt.date(total // 12, total % 12 + 1, 1)


def build_axis(window: DateWindow, plot: PlotGeometry) -> AxisScale:
    granularity = choose_granularity(window)
    if granularity == "month":
        # A short window gets a month of padding on both sides so its boundary ticks are not empty.
        domain = (add_months(window.min, -1), add_months(window.max, 1))
    else:
        domain = (window.min, window.max)
    logger.debug("Axis granularity=%s domain=%s..%s", granularity, domain[0], domain[1])
    return AxisScale(
        domain=domain,
        granularity=granularity,
        pixel_range=(float(plot.margin_left), float(plot.plot_width)),
        y_range=(float(plot.plot_height), float(plot.margin_top)),
    )


def tick_dates(axis: AxisScale) -> list[dt.date]:
    start, end = axis.domain
    dates: list[dt.date] = []
    if axis.granularity == "month":
        current = start if start.day == 1 else add_months(start, 1)
        while current <= end:
            dates.append(current)
            current = add_months(current, 1)
        return dates
    year = start.year if (start.month, start.day) == (1, 1) else start.year + 1
    while dt.date(year, 1, 1) <= end:
        dates.append(dt.date(year, 1, 1))
        year += 1
    return dates


def format_tick(date: dt.date, granularity: Granularity) -> str:
    if granularity == "month":
        return f"{MONTH_ABBREV[date.month]} '{date.year % 100:02d}"
    return f"{date.year:04d}"


def build_ticks(axis: AxisScale, colors: YearColors) -> list[Tick]:
    dates = tick_dates(axis)
    last = len(dates) - 1
    ticks: list[Tick] = []
    for idx, date in enumerate(dates):
        boundary = idx == 0 or idx == last
        if boundary:
            radius, stroke, fill = BOUNDARY_TICK_RADIUS, BOUNDARY_TICK_STROKE, BOUNDARY_TICK_FILL
        else:
            color = colors.color_of(date.year)
            radius, stroke, fill = TICK_RADIUS, color, color
        ticks.append(
            Tick(
                date=date,
                x=axis.x_of(date),
                label=format_tick(date, axis.granularity),
                boundary=boundary,
                radius=radius,
                stroke=stroke,
                fill=fill,
            )
        )
    return ticks
