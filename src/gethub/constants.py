"""GitHub API constants and selector defaults."""

# GitHub API URL structure
GITHUB_API_BASE = "https://api.github.com"
GITHUB_REPOS_PATH = "repos"
RELEASES_PATH = "releases"
CONTENTS_PATH = "contents"
RATE_LIMIT_PATH = "rate_limit"

GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "GetHub.cc"
RELEASES_PER_PAGE = 100
REQUEST_TIMEOUT = 30

# Author-supplied rules, read from the repository root
MANIFEST_PATH = "gethub.json"

# Selector sentinels
LATEST_VERSION = "latest"
ALL_FILTER = "all"
MAX_VERSION_OPTIONS = 10
