"""Recommendation, filtering and ordering of enriched releases."""
from gethub.selection.recommend import recommend, recommend_all
from gethub.selection.pipeline import (
    FilterOptions,
    filter_options,
    select,
    sort_key,
    version_options,
)

__all__ = [
    "recommend",
    "recommend_all",
    "FilterOptions",
    "filter_options",
    "select",
    "sort_key",
    "version_options",
]
