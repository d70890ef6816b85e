from __future__ import annotations

import math
from typing import Sequence

from .axis import AxisScale
from .model import Connector, Event, Lane, SlotAssignment, SlotGeometry
from .year_colors import YearColorError, YearColors

LANE_Y: dict[Lane, float] = {
    "far_negative": -100.0,
    "near_negative": -60.0,
    "near_positive": 40.0,
    "far_positive": 90.0,
}

STUB_Y_BELOW = -10.0
STUB_Y_ABOVE = 10.0


def lane_for_index(index: int) -> Lane:
    """
    Even indexes go below the axis, odd indexes above; within a side the lane alternates far/near.

    Below the axis the counter is `index // 2`, above it is `ceil(index / 2)`, and an even counter
    picks the far lane. Consecutive events therefore never share a lane and the pattern repeats
    every four: far-, near+, near-, far+, far-, ...
    """
    if index < 0:
        raise ValueError(f"index must be >= 0 (got {index})")
    if index % 2 == 0:
        count = index // 2
        return "far_negative" if count % 2 == 0 else "near_negative"
    count = math.ceil(index / 2)
    return "far_positive" if count % 2 == 0 else "near_positive"


def stub_for_index(index: int) -> float:
    return STUB_Y_BELOW if index % 2 == 0 else STUB_Y_ABOVE


def place_event(index: int, event: Event, axis: AxisScale, geometry: SlotGeometry) -> SlotAssignment:
    lane = lane_for_index(index)
    return SlotAssignment(
        lane=lane,
        x=axis.x_of(event.date) - geometry.half_box_width,
        y=axis.y_of(LANE_Y[lane]),
    )


def connector_for(
    index: int,
    slot: SlotAssignment,
    axis: AxisScale,
    color: str,
    geometry: SlotGeometry,
) -> Connector:
    x = slot.x + geometry.box_offset
    if math.isnan(x):
        x = 0.0
    return Connector(x=x, y1=axis.y_of(stub_for_index(index)), y2=axis.y_of(LANE_Y[slot.lane]), color=color)


def event_color(event: Event, colors: YearColors) -> str:
    if event.year is None:
        raise YearColorError(f"Event {event.company!r} (row {event.row_index}) has no date to color by")
    return colors.color_of(event.year)


def place_events(
    events: Sequence[Event],
    axis: AxisScale,
    colors: YearColors,
    geometry: SlotGeometry,
) -> list[tuple[Event, SlotAssignment, Connector, str]]:
    """Undated events have no position or color; callers pass dated events only."""
    placed: list[tuple[Event, SlotAssignment, Connector, str]] = []
    for index, event in enumerate(events):
        slot = place_event(index, event, axis, geometry)
        color = event_color(event, colors)
        placed.append((event, slot, connector_for(index, slot, axis, color, geometry), color))
    return placed
