"""
Collaborators the layout engine needs from whatever hosts the visual.

The engine never subclasses a host; it receives an object satisfying `TimelineHost` and calls it.
`StaticHost` is the in-memory implementation used by the command line shell and the tests.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol, Sequence

import nh3

from .config import DEFAULT_VIEWPORT, TimelineConfig
from .model import Viewport


@dataclass(frozen=True)
class TableColumn:
    name: str
    roles: tuple[str, ...] = ()


@dataclass(frozen=True)
class TableData:
    columns: Sequence[TableColumn]
    rows: Sequence[Sequence[Any]]


class TimelineHost(Protocol):
    def get_table(self) -> TableData: ...

    def create_selection_handle(self, row_index: int) -> object: ...

    def get_configuration(self) -> TimelineConfig: ...

    def get_viewport(self) -> Viewport: ...

    def validate_data_url(self, value: str) -> bool: ...

    def sanitize_markup(self, value: str) -> str: ...


# Shape check after the `valid-data-url` package: optional media type + params, optional base64 flag.
_DATA_URL_RE = re.compile(
    r"^\s*data:([a-z]+/[a-z0-9\-+.]+(;[a-z\-]+=[a-z0-9\-]+)?)?(;base64)?,([a-z0-9!$&',()*+;=\-._~:@/?%\s]*?)\s*$",
    flags=re.IGNORECASE,
)


def validate_data_url(value: str) -> bool:
    if not isinstance(value, str) or not value:
        return False
    return _DATA_URL_RE.match(value) is not None


ALLOWED_TAGS = frozenset(
    {"a", "b", "br", "div", "em", "i", "li", "ol", "p", "span", "strong", "u", "ul"},
)
# Removed together with their content, not just unwrapped.
DROPPED_CONTENT_TAGS = frozenset({"script", "style", "iframe", "textarea", "noscript"})
LINK_SCHEMES = frozenset({"http", "https", "mailto", "ftp"})


def sanitize_markup(value: str) -> str:
    """
    Neutralize user-supplied markup before it reaches a rendering surface.

    Script-like blocks are dropped with their content, tags outside `ALLOWED_TAGS` are unwrapped,
    attributes are stripped except a scheme-checked `href` on anchors, and the result is
    re-serialized so text is escaped exactly once (existing entities are decoded first).
    """

    return nh3.clean(
        value or "",
        tags=set(ALLOWED_TAGS),
        clean_content_tags=set(DROPPED_CONTENT_TAGS),
        attributes={"a": {"href"}, "*": set()},
        url_schemes=set(LINK_SCHEMES),
        link_rel=None,
    )


@dataclass
class StaticHost:
    table: TableData
    config: TimelineConfig = field(default_factory=TimelineConfig)
    viewport: Viewport = DEFAULT_VIEWPORT
    handle_factory: Optional[Callable[[int], object]] = None
    issued_handles: list[object] = field(default_factory=list)

    def get_table(self) -> TableData:
        return self.table

    def create_selection_handle(self, row_index: int) -> object:
        handle = self.handle_factory(row_index) if self.handle_factory is not None else ("row", row_index)
        self.issued_handles.append(handle)
        return handle

    def get_configuration(self) -> TimelineConfig:
        return self.config

    def get_viewport(self) -> Viewport:
        return self.viewport

    def validate_data_url(self, value: str) -> bool:
        return validate_data_url(value)

    def sanitize_markup(self, value: str) -> str:
        return sanitize_markup(value)
