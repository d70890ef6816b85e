from __future__ import annotations

import datetime as dt
import logging
import re
from typing import Any, Sequence

from .host import TableColumn, TableData, TimelineHost
from .model import Event, EventKind

logger = logging.getLogger(__name__)

MAX_EVENTS = 100

# Column claim order; a column carrying several roles is claimed by the first listed here.
ROLES = ("Company", "Type", "Description", "CompanyLink", "Date", "HeaderImage", "FooterImage")

_KIND_BY_LABEL: dict[str, EventKind] = {
    "regulatory": "regulatory",
    "commercial": "commercial",
    "clinical trials": "clinical_trials",
    "clinical trails": "clinical_trials",
    "clinicaltrials": "clinical_trials",
    "launch": "launch",
}

_YMD_RE = re.compile(r"^(?P<year>\d{4})[/.-](?P<month>\d{1,2})(?:[/.-](?P<day>\d{1,2}))?$")
_MDY_RE = re.compile(r"^(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4})$")
_YEAR_RE = re.compile(r"^(?P<year>\d{4})$")


def resolve_roles(columns: Sequence[TableColumn]) -> dict[str, int]:
    indexes: dict[str, int] = {}
    for idx, column in enumerate(columns):
        roles = set(column.roles)
        for role in ROLES:
            if role in roles:
                # First column wins; a later duplicate does not steal the role.
                indexes.setdefault(role, idx)
                break
    return indexes


def _cell(row: Sequence[Any], index: int | None) -> Any:
    if index is None or index >= len(row):
        return None
    return row[index]


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_text(value: Any) -> str | None:
    text = _text(value)
    return text or None


def parse_event_kind(value: Any) -> EventKind:
    label = re.sub(r"[\s_]+", " ", _text(value)).lower()
    return _KIND_BY_LABEL.get(label, "unknown")


def _parse_date_cell(value: Any) -> dt.date | None:
    """
    Accept either:
    - a date/datetime cell supplied by the host
    - ISO text ("2024-03-01", "2024-03-01T10:00:00", "2024-03")
    - slash forms ("2024/03/01", "03/01/2024")
    - year-only text ("2024")
    Anything else yields None.
    """
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value

    raw = _text(value)
    if not raw:
        return None
    try:
        return dt.datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    try:
        m = _YMD_RE.match(raw)
        if m:
            return dt.date(int(m.group("year")), int(m.group("month")), int(m.group("day") or 1))
        m = _MDY_RE.match(raw)
        if m:
            return dt.date(int(m.group("year")), int(m.group("month")), int(m.group("day")))
        m = _YEAR_RE.match(raw)
        if m:
            return dt.date(int(m.group("year")), 1, 1)
    except ValueError:
        return None
    return None


def parse_event_date(value: Any) -> dt.date | None:
    date = _parse_date_cell(value)
    # The data window closes on the January 1 after the latest year, which must exist.
    if date is not None and date.year >= dt.MAXYEAR:
        return None
    return date


def _image(host: TimelineHost, value: Any) -> str | None:
    url = _optional_text(value)
    if url is None or not host.validate_data_url(url):
        return None
    return url


def extract_events(table: TableData, host: TimelineHost, *, limit: int = MAX_EVENTS) -> list[Event]:
    roles = resolve_roles(table.columns)
    logger.debug("Resolved column roles: %s", roles)

    company_idx = roles.get("Company")
    type_idx = roles.get("Type")
    desc_idx = roles.get("Description")
    link_idx = roles.get("CompanyLink")
    date_idx = roles.get("Date")
    header_idx = roles.get("HeaderImage")
    footer_idx = roles.get("FooterImage")

    events: list[Event] = []
    undated = 0
    for row_index, row in enumerate(table.rows):
        if len(events) >= limit:
            logger.info("Dropping %d row(s) beyond the %d event cap", len(table.rows) - limit, limit)
            break

        description = _optional_text(_cell(row, desc_idx))
        link = _optional_text(_cell(row, link_idx))
        date = parse_event_date(_cell(row, date_idx))
        if date is None:
            undated += 1
        type_label = _text(_cell(row, type_idx))

        events.append(
            Event(
                company=host.sanitize_markup(_text(_cell(row, company_idx))),
                kind=parse_event_kind(type_label),
                type_label=type_label,
                description=host.sanitize_markup(description) if description is not None else None,
                company_link=host.sanitize_markup(link) if link is not None else None,
                date=date,
                header_image=_image(host, _cell(row, header_idx)),
                footer_image=_image(host, _cell(row, footer_idx)),
                identity=host.create_selection_handle(row_index),
                row_index=row_index,
            )
        )

    if undated:
        logger.warning("%d row(s) have a missing or unparsable date; they are left out of date filtering", undated)
    return events
