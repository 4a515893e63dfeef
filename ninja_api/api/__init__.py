"""
HTTP layer: FastAPI application, exception handlers and routers.
"""
