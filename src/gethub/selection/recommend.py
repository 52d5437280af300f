"""Mark the assets that suit the user's platform."""
from typing import Iterable, Tuple

from gethub.types import EnrichedRelease, PlatformGuess


def recommend(release: EnrichedRelease, platform: PlatformGuess) -> EnrichedRelease:
    """Flag recommended assets within one release.

    Exact OS and architecture matches win. When the release has none, every
    asset built for the user's OS is recommended instead, whatever its
    architecture. Without a known OS nothing is recommended.
    """
    exact = [
        platform.os is not None
        and platform.arch is not None
        and asset.os == platform.os
        and asset.arch == platform.arch
        for asset in release.assets
    ]

    if not any(exact) and platform.os is not None:
        flags = [asset.os == platform.os for asset in release.assets]
    else:
        flags = exact

    return release.with_assets(
        asset.recommended(flag) for asset, flag in zip(release.assets, flags)
    )


def recommend_all(
    releases: Iterable[EnrichedRelease], platform: PlatformGuess
) -> Tuple[EnrichedRelease, ...]:
    """Apply recommend() to each release independently."""
    return tuple(recommend(release, platform) for release in releases)
