"""
Core application utilities.

This package provides:
- Application-level settings (separate from DB settings)
- Logging configuration with request correlation ids
- Business error types
- FastAPI dependency helpers (service and page request binding)
"""
