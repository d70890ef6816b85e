from __future__ import annotations

import datetime as dt
import logging
from typing import Sequence

from .axis import AxisScale, build_axis, build_ticks
from .callouts import build_banner, build_callout
from .config import TimelineConfig, plot_geometry
from .host import TimelineHost
from .model import (
    Banner,
    Connector,
    Event,
    PlacedEvent,
    PlotGeometry,
    SlotAssignment,
    SlotGeometry,
    Tick,
    TimelineLayout,
    WindowSelection,
)
from .rows import extract_events
from .slots import place_events
from .window import select_window
from .year_colors import YearColors, assign_year_colors

logger = logging.getLogger(__name__)


def assemble_layout(
    *,
    selection: WindowSelection,
    colors: YearColors,
    axis: AxisScale,
    ticks: Sequence[Tick],
    placed: Sequence[tuple[Event, SlotAssignment, Connector, str]],
    config: TimelineConfig,
    plot: PlotGeometry,
    banner: Banner | None = None,
) -> TimelineLayout:
    if not placed:
        return TimelineLayout.empty(plot=plot, banner=banner)
    events = tuple(
        PlacedEvent(
            index=index,
            event=event,
            slot=slot,
            connector=connector,
            color=color,
            callout=build_callout(event, config),
        )
        for index, (event, slot, connector, color) in enumerate(placed)
    )
    return TimelineLayout(
        window=selection.window,
        colors=colors,
        axis=axis,
        ticks=tuple(ticks),
        events=events,
        plot=plot,
        banner=banner,
        fallback=selection.fallback,
    )


def build_layout(
    host: TimelineHost,
    *,
    today: dt.date | None = None,
    slot_geometry: SlotGeometry | None = None,
) -> TimelineLayout:
    """Run one full update: host table → events → window → colors → axis → slots → layout."""
    config = host.get_configuration()
    plot = plot_geometry(host.get_viewport(), config)
    today = today or dt.date.today()
    geometry = slot_geometry or SlotGeometry()

    events = extract_events(host.get_table(), host)
    selection = select_window(events, today=today, years_back=config.years_back, years_forward=config.years_forward)
    if selection is None or not selection.events:
        logger.info("Nothing to draw (%d extracted event(s), no usable dates)", len(events))
        return TimelineLayout.empty(plot=plot, banner=build_banner([], config))

    colors = assign_year_colors(selection.window)
    axis = build_axis(selection.window, plot)
    ticks = build_ticks(axis, colors)
    # The data-driven window keeps undated rows in the working set; they have nowhere to go on the axis.
    dated = [event for event in selection.events if event.date is not None]
    if len(dated) < len(selection.events):
        logger.debug("Skipping %d undated event(s) during placement", len(selection.events) - len(dated))
    placed = place_events(dated, axis, colors, geometry)

    layout = assemble_layout(
        selection=selection,
        colors=colors,
        axis=axis,
        ticks=ticks,
        placed=placed,
        config=config,
        plot=plot,
        banner=build_banner(selection.events, config),
    )
    logger.info(
        "Laid out %d event(s) over %s..%s (%s ticks%s)",
        len(layout.events),
        selection.window.min.year,
        selection.window.max.year,
        axis.granularity,
        ", data-driven window" if selection.fallback else "",
    )
    return layout
