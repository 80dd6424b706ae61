"""
Application layer - Use cases, DTOs, and service factories.

Use cases are the only entry point for API handlers: each one loads a
snapshot through a store, runs the core rules and persists the result.
"""

from almacen.application.services import get_clock, get_query_service, reset_services

__all__ = [
    "get_query_service",
    "get_clock",
    "reset_services",
]
