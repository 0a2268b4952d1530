"""Icon candidates for the site settings favicon picker."""

from __future__ import annotations

import random

from linkboard.config import SiteSettings
from linkboard.icons.synthesizer import ICON_CANDIDATE_COUNT, IconAsset, synthesize_candidates


def icon_candidates(
    settings: SiteSettings,
    count: int = ICON_CANDIDATE_COUNT,
    *,
    rng: random.Random | None = None,
) -> list[IconAsset]:
    """Fresh candidates labelled by the navigation title. Empty assets are dropped."""
    return [
        asset
        for asset in synthesize_candidates(settings.nav_title, count, rng=rng)
        if not asset.is_empty
    ]


def apply_favicon(settings: SiteSettings, asset: IconAsset) -> SiteSettings:
    """Return settings using *asset* as the favicon; empty assets leave them unchanged."""
    if asset.is_empty:
        return settings
    return settings.model_copy(update={"favicon": asset.data_uri})
