"""Error taxonomy for search-light.

Only ``InvalidCollectionTypeError`` is ever raised to callers, and only through
the deferred result channel (``then``/``catch``, ``await`` and ``results()``).
The other errors describe recoverable usage problems: they are logged as
warnings and the offending call becomes a no-op.
"""

import logging


class SearchLightError(Exception):
    """Base error for search-light."""

    error_type = "search_light_error"


class InvalidCollectionTypeError(SearchLightError, TypeError):
    """Raised when the searched collection is not a sequence, mapping or text."""

    error_type = "invalid_collection_type"


class InvalidConstraintTypeError(SearchLightError, TypeError):
    """Describes a constraint that is neither text, a filter sequence nor a filter mapping."""

    error_type = "invalid_constraint_type"


class InvalidFilterOperatorError(SearchLightError, ValueError):
    """Describes a filter whose comparison operator is not recognized."""

    error_type = "invalid_filter_operator"


def report_usage_warning(logger: logging.Logger, error: SearchLightError) -> SearchLightError:
    """Log a recoverable usage problem at WARNING level and count it."""
    from search_light.observability.metrics import USAGE_WARNINGS

    USAGE_WARNINGS.labels(error_type=error.error_type).inc()
    logger.warning("%s", error, extra={"error_type": error.error_type})
    return error
