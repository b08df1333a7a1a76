"""search-light: in-memory search and filtering for small collections."""

from search_light.config import Settings, get_settings
from search_light.domain.model import Filter, InjectedStats, Match, Operator, SearchResults
from search_light.engine import SearchLight, search
from search_light.errors import (
    InvalidCollectionTypeError,
    InvalidConstraintTypeError,
    InvalidFilterOperatorError,
    SearchLightError,
)


__version__ = "1.0.0"

__all__ = [
    "Filter",
    "InjectedStats",
    "InvalidCollectionTypeError",
    "InvalidConstraintTypeError",
    "InvalidFilterOperatorError",
    "Match",
    "Operator",
    "SearchLight",
    "SearchLightError",
    "SearchResults",
    "Settings",
    "get_settings",
    "search",
]
