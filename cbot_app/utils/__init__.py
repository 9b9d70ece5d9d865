"""
Utility functions module.

Time Semantics:
- Feed timestamps are opaque integers used only for ordering and dedup
- User-facing dates are Brasília time, computed as UTC minus exactly 3 hours
- Response timestamps are ISO-8601 UTC with millisecond precision
"""
