"""Asset classification: manifest rules and filename heuristics."""
from gethub.classify.rules import matches, find_matching_rule
from gethub.classify.heuristics import infer
from gethub.classify.enrich import enrich, enrich_asset

__all__ = [
    "matches",
    "find_matching_rule",
    "infer",
    "enrich",
    "enrich_asset",
]
