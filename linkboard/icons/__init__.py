"""Procedural site icon synthesis."""

from linkboard.icons.colors import GeneratedColor, derive_partner, generate_color_pair, random_color
from linkboard.icons.synthesizer import (
    FALLBACK_GLYPH,
    ICON_CANDIDATE_COUNT,
    IconAsset,
    IconSpec,
    decode_data_uri,
    encode_svg,
    render_svg,
    select_glyph,
    synthesize_candidates,
    synthesize_icon,
)

__all__ = [
    "FALLBACK_GLYPH",
    "ICON_CANDIDATE_COUNT",
    "GeneratedColor",
    "IconAsset",
    "IconSpec",
    "decode_data_uri",
    "derive_partner",
    "encode_svg",
    "generate_color_pair",
    "random_color",
    "render_svg",
    "select_glyph",
    "synthesize_candidates",
    "synthesize_icon",
]
