"""Random HSL color pairs for icon gradients."""

from __future__ import annotations

import random
from dataclasses import dataclass

SATURATION_RANGE = (70.0, 90.0)
LIGHTNESS_RANGE = (45.0, 60.0)
HUE_OFFSET_RANGE = (30.0, 60.0)
PARTNER_SATURATION = 70.0
PARTNER_LIGHTNESS = 50.0


def _fmt(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


@dataclass(frozen=True, slots=True)
class GeneratedColor:
    """Hue in degrees [0, 360), saturation and lightness in percent."""

    hue: float
    saturation: float
    lightness: float

    def to_css(self) -> str:
        return f"hsl({_fmt(self.hue)}, {_fmt(self.saturation)}%, {_fmt(self.lightness)}%)"


def random_color(rng: random.Random | None = None) -> GeneratedColor:
    """Vivid, mid-lightness color with a whole-degree hue."""
    source = rng or random
    return GeneratedColor(
        hue=float(source.randrange(360)),
        saturation=source.uniform(*SATURATION_RANGE),
        lightness=source.uniform(*LIGHTNESS_RANGE),
    )


def derive_partner(color: GeneratedColor, rng: random.Random | None = None) -> GeneratedColor:
    """Second gradient stop: hue shifted 30-60 degrees, fixed saturation and lightness."""
    source = rng or random
    offset = source.uniform(*HUE_OFFSET_RANGE)
    return GeneratedColor(
        hue=(color.hue + offset) % 360,
        saturation=PARTNER_SATURATION,
        lightness=PARTNER_LIGHTNESS,
    )


def generate_color_pair(
    rng: random.Random | None = None,
) -> tuple[GeneratedColor, GeneratedColor]:
    first = random_color(rng)
    return first, derive_partner(first, rng)


def hue_offset(first: GeneratedColor, second: GeneratedColor) -> float:
    """Clockwise hue distance from *first* to *second*, in degrees."""
    return (second.hue - first.hue) % 360
