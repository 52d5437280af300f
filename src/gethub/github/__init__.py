"""GitHub access: repository references and the release source."""
from gethub.github.client import GitHubReleaseSource, GitHubResponse, decode_manifest
from gethub.github.repository import parse_repository

__all__ = [
    "GitHubReleaseSource",
    "GitHubResponse",
    "decode_manifest",
    "parse_repository",
]
