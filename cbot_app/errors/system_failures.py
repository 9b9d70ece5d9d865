"""
System failure error classifications.

These exceptions represent failures of the collaborators around the core:
the Redis cache, the configuration and the raster renderer.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for failures outside the parsing core."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class FetchError(SystemFailureError):
    """The key-value store is unreachable or a requested key has no value."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 keys: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.keys = keys or []


class ConfigurationMissingError(SystemFailureError):
    """Required store credentials are absent."""

    def __init__(self, message: str, missing: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.missing = missing or []


class RenderError(SystemFailureError):
    """The raster renderer failed to produce an image."""

    def __init__(self, message: str, title: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.title = title
