"""Attach platform metadata to every release asset."""
import logging
from typing import Iterable, Optional, Tuple

from gethub.classify.heuristics import infer
from gethub.classify.rules import find_matching_rule
from gethub.logging import get_logger, log_with_data
from gethub.types import (
    Asset,
    EnrichedAsset,
    EnrichedRelease,
    Manifest,
    Release,
    RuleClassification,
)

logger = get_logger(__name__)


def enrich_asset(asset: Asset, manifest: Optional[Manifest]) -> EnrichedAsset:
    """Classify one asset from the manifest if there is one, else from its name.

    With a manifest, an asset no rule matches stays unclassified.
    """
    if manifest is not None:
        rule = find_matching_rule(asset.name, manifest.rules)
        if rule is None:
            return EnrichedAsset(asset=asset)
        return EnrichedAsset(asset=asset, classification=RuleClassification(rule=rule))

    return EnrichedAsset(asset=asset, classification=infer(asset.name))


def enrich(
    releases: Iterable[Release], manifest: Optional[Manifest]
) -> Tuple[EnrichedRelease, ...]:
    """Classify the assets of every release; order and count are preserved."""
    enriched = tuple(
        EnrichedRelease(
            release=release,
            assets=tuple(enrich_asset(asset, manifest) for asset in release.assets),
        )
        for release in releases
    )

    log_with_data(logger, logging.DEBUG, "Assets enriched", {
        "event": "assets_enriched",
        "source": "manifest" if manifest is not None else "heuristic",
        "releases": len(enriched),
        "assets": sum(len(r.assets) for r in enriched),
    })
    return enriched
