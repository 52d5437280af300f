"""Functions for turning user input into a GitHub owner/repo pair"""

import re
from typing import Tuple

from gethub.errors import InvalidRepositoryError

GITHUB_URL_PATTERN = re.compile(r"github\.com[/:]([^/]+)/([^/]+)")
OWNER_REPO_PATTERN = re.compile(r"^([^/\s]+)/([^/\s]+)$")


def parse_repository(value: str) -> Tuple[str, str]:
    """Extract owner and repository name from a GitHub URL or "owner/repo".

    Accepts https://github.com/owner/repo(.git), github.com/owner/repo,
    git@github.com:owner/repo.git and owner/repo.
    """
    text = (value or "").strip()
    if not text:
        raise InvalidRepositoryError(value, "repository cannot be empty")

    if "?" in text or "#" in text:
        raise InvalidRepositoryError(value, "URLs with query parameters or fragments not supported")

    if text.startswith("http://"):
        raise InvalidRepositoryError(value, "HTTP URLs not supported, use HTTPS")

    pattern = GITHUB_URL_PATTERN if "github.com" in text else OWNER_REPO_PATTERN
    match = pattern.search(text)
    if match:
        owner, repo = match.groups()
        if repo.endswith(".git"):
            repo = repo[: -len(".git")]
        if owner and repo:
            return owner, repo

    raise InvalidRepositoryError(value, "expected a GitHub repository URL or owner/repo")
