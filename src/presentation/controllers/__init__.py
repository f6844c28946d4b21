"""
Controllers Package - Presentation Layer

This package contains FastAPI controllers (routers) that handle
HTTP requests and responses. Controllers are responsible for
error handling and mapping between API DTOs and application
layer use cases.
"""

from .risk_controller import router as risk_router
from .system_controller import router as system_router

__all__ = ["risk_router", "system_router"]
