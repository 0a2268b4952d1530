"""Placeholder site icons synthesized locally as SVG data URIs.

Each icon is a rounded square filled with a diagonal two-stop gradient and a
single white glyph: the first visible character of the site label. Latin
initials look generic, so an ASCII letter (or a label with nothing visible)
is replaced by :data:`FALLBACK_GLYPH`.

Every call mints a fresh gradient id so several icons can be inlined into the
same document without their ``url(#...)`` references colliding.
"""

from __future__ import annotations

import base64
import binascii
import html
import logging
import random
import string
from dataclasses import dataclass

from linkboard.domain.exceptions import EncodingError
from linkboard.icons.colors import GeneratedColor, generate_color_pair

logger = logging.getLogger(__name__)

FALLBACK_GLYPH = "云"
ICON_CANDIDATE_COUNT = 6
ICON_SIZE = 64
MEDIA_TYPE = "image/svg+xml"
GRADIENT_ID_PREFIX = "g_"
GRADIENT_ID_LENGTH = 9

_DATA_URI_PREFIX = f"data:{MEDIA_TYPE};base64,"
_ID_ALPHABET = string.ascii_lowercase + string.digits

_SVG_TEMPLATE = "\n".join(
    (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {size} {size}">',
        "<defs>",
        '<linearGradient id="{gid}" x1="0" y1="0" x2="1" y2="1">',
        '<stop offset="0%" stop-color="{color_a}"/>',
        '<stop offset="100%" stop-color="{color_b}"/>',
        "</linearGradient>",
        "</defs>",
        '<rect width="100%" height="100%" fill="url(#{gid})" rx="16"/>',
        '<text x="50%" y="50%" dy=".35em" fill="white" font-family="Arial, sans-serif" '
        'font-weight="bold" font-size="32" text-anchor="middle">{glyph}</text>',
        "</svg>",
    )
)


@dataclass(frozen=True, slots=True)
class IconSpec:
    label: str
    color_a: GeneratedColor
    color_b: GeneratedColor

    @property
    def glyph(self) -> str:
        return select_glyph(self.label)


@dataclass(frozen=True, slots=True)
class IconAsset:
    """A synthesized icon. ``data_uri`` is empty when encoding failed."""

    data_uri: str
    markup: str
    gradient_id: str
    glyph: str
    color_a: GeneratedColor
    color_b: GeneratedColor

    @property
    def is_empty(self) -> bool:
        return not self.data_uri


def select_glyph(label: str | None) -> str:
    """Return the first visible character of *label*, or the fallback glyph.

    Leading whitespace and non-printable characters are skipped. An ASCII
    letter in first visible position is replaced by :data:`FALLBACK_GLYPH`.
    """
    for char in label or "":
        if char.isspace() or not char.isprintable():
            continue
        return FALLBACK_GLYPH if char in string.ascii_letters else char
    return FALLBACK_GLYPH


def new_gradient_id(rng: random.Random | None = None) -> str:
    source = rng or random
    return GRADIENT_ID_PREFIX + "".join(source.choices(_ID_ALPHABET, k=GRADIENT_ID_LENGTH))


def render_svg(spec: IconSpec, gradient_id: str) -> str:
    return _SVG_TEMPLATE.format(
        size=ICON_SIZE,
        gid=gradient_id,
        color_a=spec.color_a.to_css(),
        color_b=spec.color_b.to_css(),
        glyph=html.escape(spec.glyph),
    )


def encode_svg(markup: str) -> str:
    """Base64 the UTF-8 bytes of *markup* into an ``image/svg+xml`` data URI.

    Raises:
        EncodingError: If the markup cannot be represented as UTF-8.
    """
    try:
        payload = base64.b64encode(markup.encode("utf-8")).decode("ascii")
    except UnicodeError as exc:
        raise EncodingError(
            f"SVG icon encoding failed: {exc}", details={"error_type": type(exc).__name__}
        ) from exc
    return _DATA_URI_PREFIX + payload


def decode_data_uri(data_uri: str) -> str:
    """Recover the SVG markup from a data URI produced by :func:`encode_svg`."""
    if not data_uri.startswith(_DATA_URI_PREFIX):
        msg = f"Not a base64 {MEDIA_TYPE} data URI"
        raise ValueError(msg)
    try:
        raw = base64.b64decode(data_uri[len(_DATA_URI_PREFIX) :], validate=True)
    except binascii.Error as exc:
        msg = f"Malformed base64 payload: {exc}"
        raise ValueError(msg) from exc
    return raw.decode("utf-8")


def synthesize_icon(
    label: str,
    *,
    rng: random.Random | None = None,
    colors: tuple[GeneratedColor, GeneratedColor] | None = None,
) -> IconAsset:
    """Build one icon for *label*. Never raises on encoding problems."""
    color_a, color_b = colors or generate_color_pair(rng)
    spec = IconSpec(label=label, color_a=color_a, color_b=color_b)
    gradient_id = new_gradient_id(rng)
    markup = render_svg(spec, gradient_id)

    try:
        data_uri = encode_svg(markup)
    except EncodingError as exc:
        logger.error(
            "icon_encoding_failed",
            extra={"gradient_id": gradient_id, "error": exc.message, **exc.details},
        )
        data_uri = ""

    return IconAsset(
        data_uri=data_uri,
        markup=markup,
        gradient_id=gradient_id,
        glyph=spec.glyph,
        color_a=color_a,
        color_b=color_b,
    )


def synthesize_candidates(
    label: str, count: int = ICON_CANDIDATE_COUNT, *, rng: random.Random | None = None
) -> list[IconAsset]:
    """Independent icons for the same label, each with its own colors and gradient id."""
    if count < 1:
        msg = "Icon candidate count must be positive"
        raise ValueError(msg)
    return [synthesize_icon(label, rng=rng) for _ in range(count)]
