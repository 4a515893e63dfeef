"""
API route modules.

This package contains the ninja registry router, included from
ninja_api.api.main under the /v1 prefix.
"""
