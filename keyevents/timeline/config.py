from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import tomllib

from .model import LayoutMode, PlotGeometry, Viewport

LAYOUT_MODES: tuple[LayoutMode, ...] = ("none", "header", "footer")

MARGIN_TOP = 50
MARGIN_RIGHT = 40
MARGIN_BOTTOM = 50
MARGIN_LEFT = 40
BANNER_HEIGHT = 105
# Keeps today.year +/- the offset inside the range `datetime.date` can represent.
MAX_YEAR_OFFSET = 1000

DEFAULT_VIEWPORT = Viewport(width=1200, height=600)


@dataclass(frozen=True)
class TimelineConfig:
    layout_mode: LayoutMode = "none"
    years_back: int = 1
    years_forward: int = 8
    rich_content: bool = False
    link_base_url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.layout_mode not in LAYOUT_MODES:
            raise ValueError(f"layout_mode must be one of {', '.join(LAYOUT_MODES)} (got {self.layout_mode!r})")
        for name in ("years_back", "years_forward"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer (got {value!r})")
            if value > MAX_YEAR_OFFSET:
                raise ValueError(f"{name} must be at most {MAX_YEAR_OFFSET} (got {value})")

    @property
    def has_banner(self) -> bool:
        return self.layout_mode in {"header", "footer"}


@dataclass(frozen=True)
class LoadedConfig:
    timeline: TimelineConfig
    viewport: Viewport


def plot_geometry(viewport: Viewport, config: TimelineConfig) -> PlotGeometry:
    """Derive the drawable area; header/footer modes give up a fixed band for the banner image."""

    height = viewport.height - BANNER_HEIGHT if config.has_banner else viewport.height
    return PlotGeometry(
        margin_top=MARGIN_TOP,
        margin_right=MARGIN_RIGHT,
        margin_bottom=MARGIN_BOTTOM,
        margin_left=MARGIN_LEFT,
        plot_width=viewport.width - MARGIN_LEFT - MARGIN_RIGHT,
        plot_height=height - MARGIN_TOP - MARGIN_BOTTOM,
    )


def _int_field(path: Path, raw: dict[str, object], key: str, default: int) -> int:
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise SystemExit(f"{path}: {key} must be an integer")
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise SystemExit(f"{path}: {key} must be an integer (got {value!r})") from None


def load_timeline_config(path: Path) -> LoadedConfig:
    raw = tomllib.loads(path.read_text(encoding="utf-8"))

    layout_mode = str(raw.get("layout_mode") or "none").strip().lower()
    if layout_mode not in LAYOUT_MODES:
        raise SystemExit(f"{path}: layout_mode must be one of {', '.join(LAYOUT_MODES)}")

    years_back = _int_field(path, raw, "years_back", 1)
    years_forward = _int_field(path, raw, "years_forward", 8)
    if years_back < 0 or years_forward < 0:
        raise SystemExit(f"{path}: years_back and years_forward must be >= 0")
    if years_back > MAX_YEAR_OFFSET or years_forward > MAX_YEAR_OFFSET:
        raise SystemExit(f"{path}: years_back and years_forward must be <= {MAX_YEAR_OFFSET}")

    rich_content = raw.get("rich_content", False)
    if not isinstance(rich_content, bool):
        raise SystemExit(f"{path}: rich_content must be true or false")

    link_base_url = (str(raw.get("link_base_url")).strip() if raw.get("link_base_url") is not None else None) or None

    viewport_raw = raw.get("viewport") or {}
    if not isinstance(viewport_raw, dict):
        raise SystemExit(f"{path}: [viewport] must be a table")
    width = _int_field(path, viewport_raw, "width", int(DEFAULT_VIEWPORT.width))
    height = _int_field(path, viewport_raw, "height", int(DEFAULT_VIEWPORT.height))
    if width <= 0 or height <= 0:
        raise SystemExit(f"{path}: viewport width/height must be positive")

    timeline = TimelineConfig(
        layout_mode=layout_mode,  # type: ignore[arg-type]
        years_back=years_back,
        years_forward=years_forward,
        rich_content=rich_content,
        link_base_url=link_base_url,
    )
    return LoadedConfig(timeline=timeline, viewport=Viewport(width=width, height=height))
