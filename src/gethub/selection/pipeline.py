"""Version selection, asset filtering and display ordering."""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from gethub.constants import ALL_FILTER, LATEST_VERSION, MAX_VERSION_OPTIONS
from gethub.types import EnrichedAsset, EnrichedRelease, Manifest, Release


@dataclass(frozen=True)
class FilterOptions:
    """Distinct values offered by the OS and tag selectors"""
    os_values: Tuple[str, ...]
    tags: Tuple[str, ...]


def sort_key(asset: EnrichedAsset) -> Tuple[bool, str, str, str]:
    """Recommended first, then by OS, architecture and filename."""
    return (
        not asset.is_recommended,
        asset.os.value if asset.os else "",
        asset.arch.value if asset.arch else "",
        asset.name,
    )


def _keep(asset: EnrichedAsset, os_filter: str, tag_filter: str) -> bool:
    if os_filter != ALL_FILTER and (asset.os is None or asset.os.value != os_filter):
        return False
    if tag_filter != ALL_FILTER and tag_filter not in (asset.tags or ()):
        return False
    return True


def select(
    releases: Sequence[EnrichedRelease],
    selected_version: str = LATEST_VERSION,
    os_filter: str = ALL_FILTER,
    tag_filter: str = ALL_FILTER,
) -> Tuple[EnrichedRelease, ...]:
    """Narrow releases to the selected version and filter/sort their assets.

    Args:
        releases: Enriched releases, newest first
        selected_version: "latest" or an exact tag name
        os_filter: "all" or an OS value
        tag_filter: "all" or a tag

    Returns:
        Releases that still have assets after filtering
    """
    if selected_version == LATEST_VERSION:
        chosen = list(releases[:1])
    else:
        chosen = [r for r in releases if r.tag_name == selected_version]

    result = []
    for release in chosen:
        assets = sorted(
            (a for a in release.assets if _keep(a, os_filter, tag_filter)),
            key=sort_key,
        )
        if assets:
            result.append(release.with_assets(assets))
    return tuple(result)


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def filter_options(
    releases: Iterable[EnrichedRelease], manifest: Optional[Manifest]
) -> FilterOptions:
    """Collect selectable OS values and tags.

    A manifest lists everything its rules can assign; otherwise the values
    come from what was detected on the assets.
    """
    if manifest is not None:
        return FilterOptions(
            os_values=_unique(r.os.value for r in manifest.rules if r.os),
            tags=_unique(tag for r in manifest.rules for tag in r.tags),
        )

    assets = [a for release in releases for a in release.assets]
    return FilterOptions(
        os_values=_unique(a.os.value for a in assets if a.os),
        tags=_unique(tag for a in assets for tag in a.tags or ()),
    )


def version_options(releases: Sequence[Release]) -> List[Tuple[str, str]]:
    """Version selector entries: latest, then the most recent releases."""
    return [(LATEST_VERSION, "Latest Release")] + [
        (release.tag_name, release.name or release.tag_name)
        for release in releases[:MAX_VERSION_OPTIONS]
    ]
