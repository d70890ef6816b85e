from __future__ import annotations

import re
from dataclasses import dataclass
from html import unescape
from typing import Sequence

from .config import TimelineConfig
from .model import Banner, Callout, Event, EventKind


@dataclass(frozen=True)
class LegendEntry:
    kind: EventKind
    label: str
    slug: str


# Legend order follows the printed key: Clinical Trials, Regulatory, Commercial, Launch.
LEGEND: tuple[LegendEntry, ...] = (
    LegendEntry(kind="clinical_trials", label="Clinical Trials", slug="clinical-trials"),
    LegendEntry(kind="regulatory", label="Regulatory", slug="regulatory"),
    LegendEntry(kind="commercial", label="Commercial", slug="commercial"),
    LegendEntry(kind="launch", label="Launch", slug="launch"),
)

_SLUG_BY_KIND = {entry.kind: entry.slug for entry in LEGEND}
_TAG_RE = re.compile(r"<[^<>]*>")


def icon_key(kind: EventKind) -> str | None:
    return _SLUG_BY_KIND.get(kind)


def date_label(event: Event) -> str:
    if event.date is None:
        return ""
    return f"{event.date.month}/{event.date.day}/{event.date.year}"


def resolve_link(link: str | None, base_url: str | None) -> str | None:
    """Site-relative links are completed against `base_url`; anything starting with http is kept."""
    if not link:
        return None
    if base_url and not link.startswith("http"):
        return base_url.rstrip("/") + "/" + link.lstrip("/")
    return link


def strip_markup(text: str) -> str:
    """Plain text from sanitized markup: tags become spaces, entities are decoded."""
    return " ".join(unescape(_TAG_RE.sub(" ", text or "")).split())


def build_callout(event: Event, config: TimelineConfig) -> Callout:
    description = event.description or ""
    if not config.rich_content:
        description = strip_markup(description)
    return Callout(
        date_label=date_label(event),
        company=strip_markup(event.company),
        description=description,
        href=resolve_link(event.company_link, config.link_base_url),
        icon=icon_key(event.kind) if config.rich_content else None,
    )


def build_banner(events: Sequence[Event], config: TimelineConfig) -> Banner | None:
    if config.layout_mode == "none":
        return None
    first = events[0] if events else None
    if config.layout_mode == "header":
        return Banner(position="header", image=first.header_image if first else None)
    return Banner(position="footer", image=first.footer_image if first else None)
