from __future__ import annotations

import datetime as dt

import pytest

from keyevents.timeline.model import DateWindow, Event
from keyevents.timeline.window import candidate_window, data_window, select_window

TODAY = dt.date(2024, 6, 1)


def _event(name: str, date: dt.date | None) -> Event:
    return Event(
        company=name,
        kind="regulatory",
        type_label="Regulatory",
        description=None,
        company_link=None,
        date=date,
        header_image=None,
        footer_image=None,
        identity=name,
        row_index=0,
    )


def test_candidate_window_is_january_first_based() -> None:
    window = candidate_window(TODAY, years_back=1, years_forward=8)
    assert window == DateWindow(min=dt.date(2023, 1, 1), max=dt.date(2032, 1, 1))


def test_in_window_events_adopt_candidate_window() -> None:
    events = [_event("a", dt.date(2022, 3, 1)), _event("b", dt.date(2023, 7, 15)), _event("c", dt.date(2021, 11, 1))]
    selection = select_window(events, today=TODAY, years_back=3, years_forward=8)
    assert selection is not None
    assert selection.window == DateWindow(min=dt.date(2021, 1, 1), max=dt.date(2032, 1, 1))
    assert [e.company for e in selection.events] == ["a", "b", "c"]
    assert selection.fallback is False


def test_working_set_only_holds_in_window_events() -> None:
    events = [_event("a", dt.date(2022, 3, 1)), _event("b", dt.date(2023, 7, 15)), _event("c", dt.date(2021, 11, 1))]
    selection = select_window(events, today=TODAY, years_back=1, years_forward=8)
    assert selection is not None
    assert selection.window == DateWindow(min=dt.date(2023, 1, 1), max=dt.date(2032, 1, 1))
    assert [e.company for e in selection.events] == ["b"]


def test_window_bounds_are_inclusive_by_year() -> None:
    events = [_event("first", dt.date(2023, 1, 1)), _event("last", dt.date(2032, 12, 31)), _event("late", dt.date(2033, 1, 1))]
    selection = select_window(events, today=TODAY)
    assert selection is not None
    assert [e.company for e in selection.events] == ["first", "last"]


def test_fallback_uses_data_window_and_unfiltered_events() -> None:
    events = [_event("a", dt.date(2012, 8, 1)), _event("undated", None), _event("b", dt.date(2010, 5, 1))]
    selection = select_window(events, today=TODAY)
    assert selection is not None
    assert selection.fallback is True
    assert selection.window == DateWindow(min=dt.date(2010, 1, 1), max=dt.date(2013, 1, 1))
    assert [e.company for e in selection.events] == ["a", "undated", "b"]


def test_undated_events_never_match_the_configured_window() -> None:
    events = [_event("undated", None), _event("dated", dt.date(2025, 2, 1))]
    selection = select_window(events, today=TODAY)
    assert selection is not None
    assert [e.company for e in selection.events] == ["dated"]


def test_no_events_means_no_window() -> None:
    assert select_window([], today=TODAY) is None
    assert select_window([_event("undated", None)], today=TODAY) is None
    assert data_window([]) is None


def test_zero_offsets_give_single_year_window() -> None:
    selection = select_window([_event("a", dt.date(2024, 2, 1))], today=TODAY, years_back=0, years_forward=0)
    assert selection is not None
    assert selection.window == DateWindow(min=dt.date(2024, 1, 1), max=dt.date(2024, 1, 1))


def test_negative_offsets_are_rejected() -> None:
    with pytest.raises(ValueError):
        select_window([_event("a", dt.date(2024, 2, 1))], today=TODAY, years_back=-1)


def test_date_window_rejects_inverted_or_unnormalized_bounds() -> None:
    with pytest.raises(ValueError):
        DateWindow(min=dt.date(2025, 1, 1), max=dt.date(2024, 1, 1))
    with pytest.raises(ValueError):
        DateWindow(min=dt.date(2024, 3, 1), max=dt.date(2025, 1, 1))


def test_window_outside_representable_years_is_rejected() -> None:
    with pytest.raises(ValueError):
        candidate_window(dt.date(9990, 6, 1), years_back=0, years_forward=9)
    with pytest.raises(ValueError):
        candidate_window(dt.date(10, 6, 1), years_back=10, years_forward=0)


def test_latest_representable_year_keeps_a_closing_boundary() -> None:
    selection = select_window([_event("far", dt.date(9998, 6, 1))], today=TODAY)
    assert selection is not None and selection.fallback
    assert selection.window == DateWindow(min=dt.date(9998, 1, 1), max=dt.date(9999, 1, 1))
