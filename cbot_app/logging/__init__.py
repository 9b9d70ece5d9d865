"""
Logging configuration and utilities for the CBOT snapshot service.
"""
from .config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
