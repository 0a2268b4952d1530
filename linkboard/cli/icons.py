"""CLI to synthesize placeholder site icons.

Usage::

    python -m linkboard.cli.icons "CloudNav" --count 6 --format json
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from dataclasses import replace
from pathlib import Path
from typing import TextIO

from linkboard.config import AppConfig, SiteSettings, load_config
from linkboard.core.logging_utils import setup_json_logging
from linkboard.icons.synthesizer import IconAsset
from linkboard.services.site_icons import icon_candidates

logger = logging.getLogger(__name__)

__all__ = ["main", "parse_args", "run_icons_cli"]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Generate gradient placeholder icons for a site label",
        allow_abbrev=False,
    )
    parser.add_argument(
        "label",
        nargs="?",
        help="Label to derive the glyph from (defaults to the configured NAV_TITLE).",
    )
    parser.add_argument(
        "--count",
        type=int,
        help="Number of candidates to generate (defaults to ICON_CANDIDATE_COUNT).",
    )
    parser.add_argument(
        "--format",
        choices=["uri", "svg", "json"],
        default="uri",
        help="Print data URIs, raw SVG markup, or one JSON object per icon.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the random source for reproducible output.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Also write each icon as icon-<n>.svg into this directory.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override LOG_LEVEL for this session.",
    )
    return parser.parse_args(argv)


def _render(asset: IconAsset, fmt: str) -> str:
    if fmt == "svg":
        return asset.markup
    if fmt == "json":
        return json.dumps(
            {
                "glyph": asset.glyph,
                "gradient_id": asset.gradient_id,
                "color_a": asset.color_a.to_css(),
                "color_b": asset.color_b.to_css(),
                "data_uri": asset.data_uri,
            },
            ensure_ascii=False,
        )
    return asset.data_uri


def run_icons_cli(
    args: argparse.Namespace, out: TextIO = sys.stdout, cfg: AppConfig | None = None
) -> int:
    """Generate icons and write them to *out*. Returns the number written."""
    cfg = cfg or load_config()
    settings = cfg.site
    if args.label is not None:
        settings = SiteSettings(nav_title=args.label)
    count = args.count if args.count is not None else cfg.runtime.icon_candidate_count
    rng = random.Random(args.seed) if args.seed is not None else None

    assets = icon_candidates(settings, count, rng=rng)
    for asset in assets:
        out.write(_render(asset, args.format) + "\n")

    if args.output_dir is not None:
        args.output_dir.mkdir(parents=True, exist_ok=True)
        for index, asset in enumerate(assets, start=1):
            (args.output_dir / f"icon-{index}.svg").write_text(asset.markup, encoding="utf-8")

    logger.info("cli_icons_generated", extra={"count": len(assets), "label": settings.nav_title})
    return len(assets)


def _prepare_config(args: argparse.Namespace) -> AppConfig:
    cfg = load_config()
    if args.log_level:
        runtime = cfg.runtime.model_copy(update={"log_level": args.log_level})
        cfg = replace(cfg, runtime=runtime)
    return cfg


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``python -m linkboard.cli.icons``."""
    args = parse_args(argv)
    try:
        cfg = _prepare_config(args)
        # stdout carries the icons; log records go to stderr
        setup_json_logging(
            cfg.runtime.log_level, log_file=cfg.runtime.log_file, stream=sys.stderr
        )
        run_icons_cli(args, sys.stdout, cfg=cfg)
    except Exception as exc:
        logger.exception("cli_icons_failed", exc_info=exc)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
