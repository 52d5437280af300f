"""Repository view: the enrich, recommend and select pipeline end to end."""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from gethub.classify.enrich import enrich
from gethub.constants import ALL_FILTER, LATEST_VERSION
from gethub.formatting import format_date, format_file_size, format_number
from gethub.github.client import GitHubReleaseSource
from gethub.logging import get_logger
from gethub.platforms import format_os, format_platform
from gethub.selection.pipeline import FilterOptions, filter_options, select, version_options
from gethub.selection.recommend import recommend_all
from gethub.types import OS, EnrichedAsset, EnrichedRelease, Manifest, PlatformGuess, Release

logger = get_logger(__name__)


@dataclass(frozen=True)
class Selection:
    """User choices in the version, OS and type selectors"""
    version: str = LATEST_VERSION
    os_filter: str = ALL_FILTER
    tag_filter: str = ALL_FILTER


@dataclass(frozen=True)
class RepositoryView:
    """Everything needed to present one repository's downloads"""
    owner: str
    repo: str
    platform: PlatformGuess
    has_manifest: bool
    selection: Selection
    versions: List[Tuple[str, str]]
    options: FilterOptions
    releases: Tuple[EnrichedRelease, ...]
    total_releases: int


def build_view(
    owner: str,
    repo: str,
    releases: Sequence[Release],
    manifest: Optional[Manifest],
    platform: PlatformGuess,
    selection: Selection = Selection(),
) -> RepositoryView:
    """Run the full pipeline over fetched data. Pure; safe to re-run on any input change."""
    enriched = enrich(releases, manifest)
    recommended = recommend_all(enriched, platform)

    return RepositoryView(
        owner=owner,
        repo=repo,
        platform=platform,
        has_manifest=manifest is not None,
        selection=selection,
        versions=version_options(releases),
        options=filter_options(enriched, manifest),
        releases=select(recommended, selection.version, selection.os_filter, selection.tag_filter),
        total_releases=len(releases),
    )


async def load_view(
    source: GitHubReleaseSource,
    owner: str,
    repo: str,
    platform: PlatformGuess,
    selection: Selection = Selection(),
) -> RepositoryView:
    """Fetch a repository's releases and manifest, then build its view."""
    releases, manifest = await source.fetch_repository(owner, repo)
    view = build_view(owner, repo, releases, manifest, platform, selection)
    logger.debug(
        f"Built view for {owner}/{repo}: {len(view.releases)} of {view.total_releases} releases shown"
    )
    return view


def asset_to_dict(asset: EnrichedAsset) -> Dict[str, Any]:
    return {
        "id": asset.asset.id,
        "name": asset.name,
        "size": asset.asset.size,
        "size_label": format_file_size(asset.asset.size),
        "download_count": asset.asset.download_count,
        "download_count_label": format_number(asset.asset.download_count),
        "download_url": asset.asset.browser_download_url,
        "content_type": asset.asset.content_type,
        "digest": asset.asset.digest,
        "os": asset.os.value if asset.os else None,
        "arch": asset.arch.value if asset.arch else None,
        "platform_label": format_platform(asset.os, asset.arch),
        "tags": list(asset.tags) if asset.tags is not None else None,
        "description": asset.description,
        "source": asset.classification.source if asset.classification else None,
        "is_recommended": bool(asset.is_recommended),
    }


def release_to_dict(release: EnrichedRelease) -> Dict[str, Any]:
    return {
        "id": release.release.id,
        "tag_name": release.tag_name,
        "name": release.name,
        "published_at": release.release.published_at,
        "published_label": format_date(release.release.published_at),
        "prerelease": release.release.prerelease,
        "draft": release.release.draft,
        "assets": [asset_to_dict(a) for a in release.assets],
    }


def view_to_dict(view: RepositoryView) -> Dict[str, Any]:
    """Serialize a view to JSON-compatible data."""
    return {
        "repository": f"{view.owner}/{view.repo}",
        "url": f"https://github.com/{view.owner}/{view.repo}",
        "platform": {
            "os": view.platform.os.value if view.platform.os else None,
            "arch": view.platform.arch.value if view.platform.arch else None,
            "label": format_platform(view.platform.os, view.platform.arch),
        },
        "has_manifest": view.has_manifest,
        "selection": {
            "version": view.selection.version,
            "os": view.selection.os_filter,
            "tag": view.selection.tag_filter,
        },
        "options": {
            "versions": [{"value": v, "label": label} for v, label in view.versions],
            "os": [
                {"value": os, "label": format_os(OS(os))} for os in view.options.os_values
            ],
            "tags": [{"value": t, "label": t} for t in view.options.tags],
        },
        "total_releases": view.total_releases,
        "releases": [release_to_dict(r) for r in view.releases],
    }
