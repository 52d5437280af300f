import pytest

from gethub.types import Asset, Release, Rule, Manifest, OS, Architecture


@pytest.fixture
def make_asset():
    """Build an Asset with sensible defaults"""
    counter = iter(range(1, 10_000))

    def _make(name: str, **kwargs) -> Asset:
        asset_id = next(counter)
        defaults = {
            "id": asset_id,
            "name": name,
            "size": 1024,
            "download_count": 10,
            "browser_download_url": f"https://github.com/o/r/releases/download/v1/{name}",
            "content_type": "application/octet-stream",
        }
        defaults.update(kwargs)
        return Asset(**defaults)

    return _make


@pytest.fixture
def make_release(make_asset):
    """Build a Release from asset filenames"""
    counter = iter(range(1, 10_000))

    def _make(tag: str, names=(), **kwargs) -> Release:
        defaults = {
            "id": next(counter),
            "tag_name": tag,
            "name": tag,
            "published_at": "2024-01-05T12:00:00Z",
            "prerelease": False,
            "draft": False,
            "assets": tuple(make_asset(n) for n in names),
        }
        defaults.update(kwargs)
        return Release(**defaults)

    return _make


@pytest.fixture
def windows_manifest() -> Manifest:
    """Manifest in the style of a CLI + GUI project"""
    return Manifest(version=1, rules=(
        Rule(asset=r"App\.Cli\.win-x64\.zip", os=OS.WINDOWS, arch=Architecture.X64,
             tags=("cli",), description="CLI flavor for Windows x64"),
        Rule(asset=r"App\.Cli\.linux-x64\.zip", os=OS.LINUX, arch=Architecture.X64,
             tags=("cli",), description="CLI flavor for Linux x64"),
        Rule(asset=r"App\.win-x64\.zip", os=OS.WINDOWS, arch=Architecture.X64,
             tags=("gui",), description="GUI flavor for Windows x64"),
    ))


def release_payload(tag: str, names=(), release_id: int = 1) -> dict:
    """GitHub API JSON for one release"""
    return {
        "id": release_id,
        "tag_name": tag,
        "name": None,
        "body": None,
        "published_at": "2024-03-01T10:00:00Z",
        "prerelease": False,
        "draft": False,
        "assets": [
            {
                "id": release_id * 100 + i,
                "name": name,
                "size": 2048,
                "download_count": 5,
                "browser_download_url": f"https://example.invalid/{name}",
                "content_type": "application/zip",
            }
            for i, name in enumerate(names)
        ],
    }


@pytest.fixture
def release_json():
    return release_payload
