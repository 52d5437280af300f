"""Matching asset names against manifest rules."""
import re
from functools import lru_cache
from typing import Iterable, Optional

from gethub.types import Rule


@lru_cache(maxsize=256)
def _compile(pattern: str) -> Optional[re.Pattern]:
    try:
        return re.compile(pattern)
    except (re.error, OverflowError, RecursionError):
        return None


def matches(filename: str, rule: Rule) -> bool:
    """Check whether a rule's pattern applies to an asset filename.

    Patterns that fail to compile fall back to a plain substring check.
    """
    regex = _compile(rule.asset)
    if regex is None:
        return rule.asset in filename
    return regex.search(filename) is not None


def find_matching_rule(filename: str, rules: Iterable[Rule]) -> Optional[Rule]:
    """Return the first rule, in manifest order, that matches filename."""
    return next((rule for rule in rules if matches(filename, rule)), None)
