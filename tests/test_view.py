"""End-to-end tests of the enrich, recommend and select pipeline."""
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from gethub.errors import RateLimitError
from gethub.github.client import GitHubReleaseSource
from gethub.types import OS, Architecture, Manifest, PlatformGuess, Rule
from gethub.view import Selection, build_view, load_view, view_to_dict


def only_asset(view):
    assert len(view.releases) == 1
    assert len(view.releases[0].assets) == 1
    return view.releases[0].assets[0]


def test_manifest_rule_recommended(make_release):
    """Test a manifest-matched asset on the user's exact platform"""
    manifest = Manifest(version=1, rules=(
        Rule(asset="app-win-x64\\.zip", os=OS.WINDOWS, arch=Architecture.X64),
    ))
    releases = [make_release("v1", ["app-win-x64.zip"])]

    view = build_view("o", "r", releases, manifest,
                      PlatformGuess(os=OS.WINDOWS, arch=Architecture.X64))

    asset = only_asset(view)
    assert asset.os == OS.WINDOWS
    assert asset.arch == Architecture.X64
    assert asset.is_recommended is True
    assert view.has_manifest


def test_heuristic_os_fallback(make_release):
    """Test an ARM64 Linux build is recommended to an x64 Linux user"""
    releases = [make_release("v1", ["tool-linux-arm64.tar.gz"])]

    view = build_view("o", "r", releases, None, PlatformGuess(os=OS.LINUX, arch=Architecture.X64))

    asset = only_asset(view)
    assert asset.os == OS.LINUX
    assert asset.arch == Architecture.ARM64
    assert asset.is_recommended is True
    assert not view.has_manifest


def test_unclassifiable_asset(make_release):
    """Test readme.txt is never recommended and only shown for 'all'"""
    releases = [make_release("v1", ["readme.txt"])]
    platform = PlatformGuess(os=OS.WINDOWS, arch=Architecture.X64)

    view = build_view("o", "r", releases, None, platform)
    asset = only_asset(view)
    assert asset.os is None
    assert asset.arch is None
    assert asset.tags == ()
    assert asset.is_recommended is False

    for os_filter in ("windows", "linux", "osx", "android"):
        filtered = build_view("o", "r", releases, None, platform, Selection(os_filter=os_filter))
        assert filtered.releases == ()


def test_tag_filter_portable(make_release):
    """Test the Portable tag filter keeps only the portable build"""
    releases = [make_release("v1", ["setup-win-x64.exe", "app-win-x64-portable.zip"])]

    view = build_view("o", "r", releases, None, PlatformGuess(), Selection(tag_filter="Portable"))

    assert only_asset(view).name == "app-win-x64-portable.zip"
    assert set(view.options.tags) == {"Installer", "Portable"}


def test_unknown_os_never_recommends(make_release):
    releases = [
        make_release("v2", ["app-win-x64.zip", "app-linux-x64.tar.gz"]),
        make_release("v1", ["app-win-x64.zip"]),
    ]

    view = build_view("o", "r", releases, None, PlatformGuess(arch=Architecture.X64),
                      Selection(version="v1"))

    assert [r.tag_name for r in view.releases] == ["v1"]
    assert not any(a.is_recommended for r in view.releases for a in r.assets)


def test_view_to_dict(make_release):
    """Test the serialized view is JSON and carries display labels"""
    releases = [make_release("v1", ["app-macos-arm64.dmg", "readme.txt"])]

    view = build_view("octo", "app", releases, None, PlatformGuess(os=OS.OSX, arch=Architecture.ARM64))
    data = view_to_dict(view)
    json.dumps(data)

    assert data["repository"] == "octo/app"
    assert data["platform"] == {"os": "osx", "arch": "arm64", "label": "macOS ARM64"}
    assert data["options"]["versions"][0] == {"value": "latest", "label": "Latest Release"}
    assert data["options"]["os"] == [{"value": "osx", "label": "macOS"}]
    assert data["total_releases"] == 1

    release = data["releases"][0]
    assert release["published_label"] == "Jan 5, 2024"
    first, second = release["assets"]
    assert first["name"] == "app-macos-arm64.dmg"
    assert first["is_recommended"] is True
    assert first["source"] == "heuristic"
    assert first["size_label"] == "1 KB"
    assert second["platform_label"] == "Any platform"
    assert second["tags"] == []


@pytest.mark.asyncio
async def test_load_view(make_release):
    """Test load_view fetches through the release source"""
    source = MagicMock(spec=GitHubReleaseSource)
    source.fetch_repository = AsyncMock(return_value=([make_release("v1", ["app-linux-x64.tar.gz"])], None))

    view = await load_view(source, "o", "r", PlatformGuess(os=OS.LINUX, arch=Architecture.X64))

    source.fetch_repository.assert_awaited_once_with("o", "r")
    assert only_asset(view).is_recommended is True


@pytest.mark.asyncio
async def test_load_view_propagates_source_errors():
    source = MagicMock(spec=GitHubReleaseSource)
    source.fetch_repository = AsyncMock(side_effect=RateLimitError(403))

    with pytest.raises(RateLimitError):
        await load_view(source, "o", "r", PlatformGuess())
