"""Core type definitions"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from gethub.logging import get_logger

logger = get_logger(__name__)

OS = Enum(
    "OS",
    [("WINDOWS", "windows"), ("LINUX", "linux"), ("OSX", "osx"), ("ANDROID", "android")],
    module=__name__,
    type=str,
)
Architecture = Enum(
    "Architecture",
    [("X86", "x86"), ("X64", "x64"), ("ARM", "arm"), ("ARM64", "arm64")],
    module=__name__,
    type=str,
)


def parse_os(value: Any) -> Optional[OS]:
    """Return the OS named by value, or None outside the known set."""
    try:
        return OS(value)
    except ValueError:
        return None


def parse_architecture(value: Any) -> Optional[Architecture]:
    """Return the architecture named by value, or None outside the known set."""
    try:
        return Architecture(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class Asset:
    """Downloadable file attached to a release"""
    id: int
    name: str
    size: int
    download_count: int
    browser_download_url: str
    content_type: str = ""
    digest: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Asset":
        return cls(
            id=data["id"],
            name=data["name"],
            size=data.get("size") or 0,
            download_count=data.get("download_count") or 0,
            browser_download_url=data.get("browser_download_url") or "",
            content_type=data.get("content_type") or "",
            digest=data.get("digest") or None,
        )


@dataclass(frozen=True)
class Release:
    """Published release with its assets, newest-first order preserved by the source"""
    id: int
    tag_name: str
    name: str
    published_at: str
    prerelease: bool
    draft: bool
    assets: Tuple[Asset, ...] = ()
    body: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Release":
        return cls(
            id=data["id"],
            tag_name=data["tag_name"],
            name=data.get("name") or data["tag_name"],
            body=data.get("body") or "",
            published_at=data.get("published_at") or "",
            prerelease=bool(data.get("prerelease")),
            draft=bool(data.get("draft")),
            assets=tuple(Asset.from_api(a) for a in data.get("assets") or ()),
        )


@dataclass(frozen=True)
class Rule:
    """Manifest rule: regex over asset names plus the metadata it assigns"""
    asset: str
    os: Optional[OS] = None
    arch: Optional[Architecture] = None
    tags: Tuple[str, ...] = ()
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Rule"]:
        """Build a rule from manifest JSON, or None when it has no usable pattern."""
        if not isinstance(data, dict) or not isinstance(data.get("asset"), str) or not data["asset"]:
            logger.warning(f"Skipping manifest rule without an asset pattern: {data!r}")
            return None

        os = parse_os(data.get("os"))
        if os is None and data.get("os") is not None:
            logger.warning(f"Ignoring unknown os {data['os']!r} in rule {data['asset']!r}")

        arch = parse_architecture(data.get("arch"))
        if arch is None and data.get("arch") is not None:
            logger.warning(f"Ignoring unknown arch {data['arch']!r} in rule {data['asset']!r}")

        tags = data.get("tags")
        description = data.get("description")
        return cls(
            asset=data["asset"],
            os=os,
            arch=arch,
            tags=tuple(t for t in tags if isinstance(t, str)) if isinstance(tags, list) else (),
            description=description if isinstance(description, str) else None,
        )


@dataclass(frozen=True)
class Manifest:
    """Contents of a repository's gethub.json"""
    version: int
    rules: Tuple[Rule, ...]

    @classmethod
    def from_dict(cls, data: Any) -> "Manifest":
        if not isinstance(data, dict) or not isinstance(data.get("rules"), list):
            raise ValueError("Manifest must be an object with a 'rules' list")

        version = data.get("version", 1)
        if not isinstance(version, int) or isinstance(version, bool):
            raise ValueError(f"Manifest version must be an integer, got {version!r}")

        rules = (Rule.from_dict(item) for item in data["rules"])
        return cls(version=version, rules=tuple(r for r in rules if r is not None))


@dataclass(frozen=True)
class PlatformGuess:
    """Best-effort guess of the user's platform; unknown fields stay None"""
    os: Optional[OS] = None
    arch: Optional[Architecture] = None


@dataclass(frozen=True)
class RuleClassification:
    """Classification taken verbatim from a matched manifest rule"""
    source: ClassVar[str] = "manifest"
    rule: Rule

    @property
    def os(self) -> Optional[OS]:
        return self.rule.os

    @property
    def arch(self) -> Optional[Architecture]:
        return self.rule.arch

    @property
    def tags(self) -> Tuple[str, ...]:
        return self.rule.tags

    @property
    def description(self) -> Optional[str]:
        return self.rule.description


@dataclass(frozen=True)
class HeuristicClassification:
    """Classification inferred from the asset filename"""
    source: ClassVar[str] = "heuristic"
    os: Optional[OS] = None
    arch: Optional[Architecture] = None
    tags: Tuple[str, ...] = ()

    @property
    def description(self) -> None:
        return None


Classification = Union[RuleClassification, HeuristicClassification]


@dataclass(frozen=True)
class EnrichedAsset:
    """Asset annotated by exactly one classification source"""
    asset: Asset
    classification: Optional[Classification] = None
    is_recommended: Optional[bool] = None

    @property
    def name(self) -> str:
        return self.asset.name

    @property
    def os(self) -> Optional[OS]:
        return self.classification.os if self.classification else None

    @property
    def arch(self) -> Optional[Architecture]:
        return self.classification.arch if self.classification else None

    @property
    def tags(self) -> Optional[Tuple[str, ...]]:
        return self.classification.tags if self.classification else None

    @property
    def description(self) -> Optional[str]:
        return self.classification.description if self.classification else None

    def recommended(self, flag: bool) -> "EnrichedAsset":
        return replace(self, is_recommended=flag)


@dataclass(frozen=True)
class EnrichedRelease:
    """Release whose assets have been classified"""
    release: Release
    assets: Tuple[EnrichedAsset, ...] = field(default=())

    @property
    def tag_name(self) -> str:
        return self.release.tag_name

    @property
    def name(self) -> str:
        return self.release.name

    def with_assets(self, assets) -> "EnrichedRelease":
        return replace(self, assets=tuple(assets))


@dataclass(frozen=True)
class RateLimit:
    """GitHub core API quota"""
    limit: int
    remaining: int
    reset: int
    used: int
