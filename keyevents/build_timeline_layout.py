#!/usr/bin/env python3
"""Build the key events timeline layout from a TSV table and print/write it as JSON."""

from __future__ import annotations

import argparse
import datetime as dt
import json
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from keyevents.timeline.config import DEFAULT_VIEWPORT, LoadedConfig, TimelineConfig, load_timeline_config
from keyevents.timeline.host import StaticHost
from keyevents.timeline.model import Viewport
from keyevents.timeline.pipeline import build_layout
from keyevents.timeline.tsv_io import read_table_tsv, write_sample_tsv

logger = logging.getLogger(__name__)

ENV_YEARS_BACK = "KEYEVENTS_YEARS_BACK"
ENV_YEARS_FORWARD = "KEYEVENTS_YEARS_FORWARD"


def _env_int(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise SystemExit(f"{name} must be an integer (got {raw!r})") from None


def _parse_today(value: str | None) -> dt.date | None:
    if not value:
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        raise SystemExit(f"--today must be YYYY-MM-DD (got {value!r})") from None


def resolve_config(config_path: Path | None, *, width: int | None, height: int | None) -> LoadedConfig:
    if config_path is not None:
        if not config_path.exists():
            raise SystemExit(f"Config file not found: {config_path}")
        loaded = load_timeline_config(config_path)
    else:
        loaded = LoadedConfig(timeline=TimelineConfig(), viewport=DEFAULT_VIEWPORT)

    timeline = loaded.timeline
    years_back = _env_int(ENV_YEARS_BACK)
    years_forward = _env_int(ENV_YEARS_FORWARD)
    try:
        if years_back is not None:
            timeline = replace(timeline, years_back=years_back)
        if years_forward is not None:
            timeline = replace(timeline, years_forward=years_forward)
        viewport = Viewport(
            width=width if width is not None else loaded.viewport.width,
            height=height if height is not None else loaded.viewport.height,
        )
    except ValueError as exc:
        raise SystemExit(str(exc)) from None
    return LoadedConfig(timeline=timeline, viewport=viewport)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Lay out a key events timeline from a TSV table (one row per event).")
    parser.add_argument("input", type=Path, help="TSV file whose header names the roles (Company, Type, Description, CompanyLink, Date, ...)")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with layout_mode, years_back, years_forward, rich_content, [viewport]")
    parser.add_argument("--today", default=None, help="Reference date (YYYY-MM-DD) used for the look-back/look-forward window; defaults to today.")
    parser.add_argument("--width", type=int, default=None, help="Viewport width in px (overrides the config file).")
    parser.add_argument("--height", type=int, default=None, help="Viewport height in px (overrides the config file).")
    parser.add_argument("--output", type=Path, default=None, help="Write the JSON layout here instead of stdout.")
    parser.add_argument("--write-sample", action="store_true", help="Create a sample TSV at INPUT when it does not exist.")
    parser.add_argument("--verbose", action="store_true", help="Debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")
    load_dotenv()

    input_tsv: Path = args.input
    if not input_tsv.exists():
        if args.write_sample:
            write_sample_tsv(input_tsv)
            logger.info("Wrote sample table to %s", input_tsv)
        else:
            raise SystemExit(f"Input TSV not found: {input_tsv}")

    loaded = resolve_config(args.config, width=args.width, height=args.height)
    try:
        table = read_table_tsv(input_tsv)
    except ValueError as exc:
        raise SystemExit(str(exc)) from None

    host = StaticHost(table=table, config=loaded.timeline, viewport=loaded.viewport)
    layout = build_layout(host, today=_parse_today(args.today))

    text = json.dumps(layout.to_dict(), indent=2, ensure_ascii=False)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(text + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
