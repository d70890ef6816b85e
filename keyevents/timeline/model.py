from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Optional

if TYPE_CHECKING:
    from .axis import AxisScale
    from .year_colors import YearColors


EventKind = Literal["regulatory", "commercial", "clinical_trials", "launch", "unknown"]
Lane = Literal["far_negative", "near_negative", "near_positive", "far_positive"]
Granularity = Literal["month", "year"]
LayoutMode = Literal["none", "header", "footer"]


@dataclass(frozen=True)
class Event:
    company: str
    kind: EventKind
    type_label: str
    description: Optional[str]
    company_link: Optional[str]
    date: Optional[dt.date]
    header_image: Optional[str]
    footer_image: Optional[str]
    identity: object
    row_index: int

    @property
    def year(self) -> int | None:
        return self.date.year if self.date is not None else None


@dataclass(frozen=True)
class DateWindow:
    min: dt.date
    max: dt.date

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"DateWindow min {self.min} is after max {self.max}")
        if (self.min.month, self.min.day) != (1, 1) or (self.max.month, self.max.day) != (1, 1):
            raise ValueError(f"DateWindow bounds must fall on January 1 (got {self.min} .. {self.max})")

    @classmethod
    def from_years(cls, min_year: int, max_year: int) -> "DateWindow":
        return cls(min=dt.date(min_year, 1, 1), max=dt.date(max_year, 1, 1))

    def contains_year(self, year: int) -> bool:
        return self.min.year <= year <= self.max.year


@dataclass(frozen=True)
class WindowSelection:
    window: DateWindow
    events: tuple[Event, ...]
    fallback: bool


@dataclass(frozen=True)
class Tick:
    date: dt.date
    x: float
    label: str
    boundary: bool
    radius: float
    stroke: str
    fill: str


@dataclass(frozen=True)
class SlotAssignment:
    lane: Lane
    x: float
    y: float


@dataclass(frozen=True)
class Connector:
    x: float
    y1: float
    y2: float
    color: str


@dataclass(frozen=True)
class Callout:
    date_label: str
    company: str
    description: str
    href: Optional[str]
    icon: Optional[str]


@dataclass(frozen=True)
class PlacedEvent:
    index: int
    event: Event
    slot: SlotAssignment
    connector: Connector
    color: str
    callout: Callout


@dataclass(frozen=True)
class Banner:
    position: Literal["header", "footer"]
    image: Optional[str]


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Viewport must be positive (got {self.width}x{self.height})")


@dataclass(frozen=True)
class PlotGeometry:
    margin_top: float
    margin_right: float
    margin_bottom: float
    margin_left: float
    plot_width: float
    plot_height: float
    axis_offset_x: float = 20.0

    @property
    def baseline_y(self) -> float:
        return self.plot_height / 2.0 + 25.0


@dataclass(frozen=True)
class SlotGeometry:
    half_box_width: float = 25.0
    box_offset: float = 45.0


@dataclass(frozen=True)
class TimelineLayout:
    window: Optional[DateWindow]
    colors: Optional["YearColors"]
    axis: Optional["AxisScale"]
    ticks: tuple[Tick, ...]
    events: tuple[PlacedEvent, ...]
    plot: Optional[PlotGeometry]
    banner: Optional[Banner] = None
    fallback: bool = False

    @classmethod
    def empty(cls, plot: PlotGeometry | None = None, banner: Banner | None = None) -> "TimelineLayout":
        return cls(window=None, colors=None, axis=None, ticks=(), events=(), plot=plot, banner=banner)

    @property
    def is_empty(self) -> bool:
        return not self.events

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form handed to renderers that live outside the process."""

        def _num(value: float) -> float | None:
            return None if value != value else round(value, 3)

        out: dict[str, Any] = {"empty": self.is_empty, "fallback": self.fallback}
        if self.banner is not None:
            out["banner"] = {"position": self.banner.position, "image": self.banner.image}
        if self.plot is not None:
            out["plot"] = {
                "width": self.plot.plot_width,
                "height": self.plot.plot_height,
                "baseline_y": self.plot.baseline_y,
                "axis_offset_x": self.plot.axis_offset_x,
            }
        if self.is_empty:
            return out
        assert self.window is not None and self.axis is not None and self.colors is not None
        out["window"] = {"min": self.window.min.isoformat(), "max": self.window.max.isoformat()}
        out["axis"] = {
            "granularity": self.axis.granularity,
            "domain": [self.axis.domain[0].isoformat(), self.axis.domain[1].isoformat()],
            "pixel_range": list(self.axis.pixel_range),
        }
        out["year_colors"] = {str(year): color for year, color in self.colors.items()}
        out["ticks"] = [
            {
                "date": tick.date.isoformat(),
                "x": _num(tick.x),
                "label": tick.label,
                "boundary": tick.boundary,
                "radius": tick.radius,
                "stroke": tick.stroke,
                "fill": tick.fill,
            }
            for tick in self.ticks
        ]
        out["events"] = [
            {
                "index": placed.index,
                "row_index": placed.event.row_index,
                "company": placed.event.company,
                "kind": placed.event.kind,
                "date": placed.event.date.isoformat() if placed.event.date else None,
                "lane": placed.slot.lane,
                "x": _num(placed.slot.x),
                "y": _num(placed.slot.y),
                "color": placed.color,
                "connector": {
                    "x": _num(placed.connector.x),
                    "y1": _num(placed.connector.y1),
                    "y2": _num(placed.connector.y2),
                },
                "callout": {
                    "date_label": placed.callout.date_label,
                    "company": placed.callout.company,
                    "description": placed.callout.description,
                    "href": placed.callout.href,
                    "icon": placed.callout.icon,
                },
            }
            for placed in self.events
        ]
        return out
