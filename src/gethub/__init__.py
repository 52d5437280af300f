"""GetHub: pick the right release download for a platform."""

from gethub.types import (
    OS,
    Architecture,
    Asset,
    Release,
    Rule,
    Manifest,
    PlatformGuess,
    RuleClassification,
    HeuristicClassification,
    EnrichedAsset,
    EnrichedRelease,
    RateLimit,
)
from gethub.classify import matches, find_matching_rule, infer, enrich
from gethub.selection import recommend, recommend_all, select, filter_options, version_options
from gethub.github import GitHubReleaseSource, parse_repository
from gethub.platforms import detect_platform, detect_platform_from_user_agent
from gethub.view import Selection, RepositoryView, build_view, load_view
from gethub.errors import (
    GetHubError,
    InvalidRepositoryError,
    ReleaseSourceError,
    RateLimitError,
    RepositoryNotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    # Data types
    "OS",
    "Architecture",
    "Asset",
    "Release",
    "Rule",
    "Manifest",
    "PlatformGuess",
    "RuleClassification",
    "HeuristicClassification",
    "EnrichedAsset",
    "EnrichedRelease",
    "RateLimit",

    # Classification
    "matches",
    "find_matching_rule",
    "infer",
    "enrich",

    # Recommendation and selection
    "recommend",
    "recommend_all",
    "select",
    "filter_options",
    "version_options",

    # GitHub and platform
    "GitHubReleaseSource",
    "parse_repository",
    "detect_platform",
    "detect_platform_from_user_agent",

    # Pipeline
    "Selection",
    "RepositoryView",
    "build_view",
    "load_view",

    # Error types
    "GetHubError",
    "InvalidRepositoryError",
    "ReleaseSourceError",
    "RateLimitError",
    "RepositoryNotFoundError",
]
