from __future__ import annotations

import datetime as dt
import math

import pytest

from keyevents.timeline.axis import build_axis
from keyevents.timeline.model import DateWindow, Event, PlotGeometry, SlotGeometry
from keyevents.timeline.slots import LANE_Y, connector_for, lane_for_index, place_event, place_events, stub_for_index
from keyevents.timeline.year_colors import YearColorError, assign_year_colors

WINDOW = DateWindow.from_years(2023, 2032)


def _plot() -> PlotGeometry:
    return PlotGeometry(margin_top=50, margin_right=40, margin_bottom=50, margin_left=40, plot_width=1120, plot_height=500)


def _event(name: str, date: dt.date | None) -> Event:
    return Event(
        company=name,
        kind="launch",
        type_label="Launch",
        description=None,
        company_link=None,
        date=date,
        header_image=None,
        footer_image=None,
        identity=name,
        row_index=0,
    )


def test_lane_cycle_for_first_eight_indexes() -> None:
    assert [lane_for_index(i) for i in range(8)] == [
        "far_negative",
        "near_positive",
        "near_negative",
        "far_positive",
        "far_negative",
        "near_positive",
        "near_negative",
        "far_positive",
    ]


def test_lane_cycle_repeats_every_four() -> None:
    for i in range(200):
        assert lane_for_index(i) == lane_for_index(i % 4)


def test_negative_index_is_rejected() -> None:
    with pytest.raises(ValueError):
        lane_for_index(-1)


def test_stub_side_follows_parity() -> None:
    assert [stub_for_index(i) for i in range(4)] == [-10.0, 10.0, -10.0, 10.0]


def test_place_event_offsets_box_from_date_position() -> None:
    axis = build_axis(WINDOW, _plot())
    slot = place_event(0, _event("a", dt.date(2023, 1, 1)), axis, SlotGeometry())
    assert slot.lane == "far_negative"
    assert slot.x == 40.0 - 25.0
    assert slot.y == axis.y_of(LANE_Y["far_negative"])


def test_connector_runs_from_stub_to_lane() -> None:
    axis = build_axis(WINDOW, _plot())
    geometry = SlotGeometry()
    slot = place_event(1, _event("a", dt.date(2023, 1, 1)), axis, geometry)
    connector = connector_for(1, slot, axis, "#123456", geometry)
    assert connector.x == slot.x + 45.0
    assert connector.y1 == axis.y_of(10.0)
    assert slot.lane == "near_positive"
    assert connector.y2 == axis.y_of(LANE_Y["near_positive"])
    assert connector.color == "#123456"


def test_out_of_domain_date_clamps_connector_to_zero() -> None:
    # 2032 is inside the window by year but past its Jan 1 upper bound.
    axis = build_axis(WINDOW, _plot())
    colors = assign_year_colors(WINDOW)
    ((event, slot, connector, color),) = place_events([_event("late", dt.date(2032, 6, 1))], axis, colors, SlotGeometry())
    assert math.isnan(slot.x)
    assert connector.x == 0.0
    assert color == colors.color_of(2032)


def test_undated_event_cannot_be_colored() -> None:
    axis = build_axis(WINDOW, _plot())
    with pytest.raises(YearColorError):
        place_events([_event("undated", None)], axis, assign_year_colors(WINDOW), SlotGeometry())


def test_placement_ignores_dates() -> None:
    axis = build_axis(WINDOW, _plot())
    colors = assign_year_colors(WINDOW)
    dates = [dt.date(2024, 1, 1), dt.date(2024, 1, 2), dt.date(2031, 5, 1), dt.date(2023, 3, 3), dt.date(2027, 7, 7)]
    forward = place_events([_event(str(i), d) for i, d in enumerate(dates)], axis, colors, SlotGeometry())
    backward = place_events([_event(str(i), d) for i, d in enumerate(reversed(dates))], axis, colors, SlotGeometry())
    assert [p[1].lane for p in forward] == [p[1].lane for p in backward]
    assert [p[1].y for p in forward] == [p[1].y for p in backward]


def test_color_miss_for_dated_event_fails_loudly() -> None:
    axis = build_axis(WINDOW, _plot())
    foreign_colors = assign_year_colors(DateWindow.from_years(2000, 2001))
    with pytest.raises(YearColorError):
        place_events([_event("a", dt.date(2024, 1, 1))], axis, foreign_colors, SlotGeometry())
