"""
Error classification for the snapshot pipeline.

Data quality errors are recovered where they occur (a malformed feed entry is
dropped). System failures escape to the caller that owns the degradation
policy: a single table, or the whole request.
"""

from .data_quality import (
    DataQualityError,
    MalformedDataError,
    MissingDataError,
)
from .system_failures import (
    SystemFailureError,
    FetchError,
    ConfigurationMissingError,
    RenderError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedDataError",
    "MissingDataError",
    # System Failures
    "SystemFailureError",
    "FetchError",
    "ConfigurationMissingError",
    "RenderError",
]
