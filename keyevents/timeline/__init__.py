from __future__ import annotations

from .config import TimelineConfig
from .host import StaticHost, TableColumn, TableData, TimelineHost
from .model import TimelineLayout
from .pipeline import build_layout

__all__ = [
    "StaticHost",
    "TableColumn",
    "TableData",
    "TimelineConfig",
    "TimelineHost",
    "TimelineLayout",
    "build_layout",
]
