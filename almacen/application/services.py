"""
Service factory functions for dependency injection.

Wires settings and infrastructure into the core services that use
cases consume.
"""

from almacen.config import get_settings
from almacen.core.interfaces import IClock
from almacen.core.services import QueryFilterService

# Singleton service instances
_query_service: QueryFilterService | None = None


def get_query_service() -> QueryFilterService:
    """Get or create the query/filter service bound to the query settings."""
    global _query_service
    if _query_service is None:
        _query_service = QueryFilterService(get_settings().query)
    return _query_service


def get_clock() -> IClock:
    """Process clock that stamps business dates and resolves stats periods."""
    from almacen.infrastructure.clock import get_clock as get_infrastructure_clock

    return get_infrastructure_clock()


def reset_services() -> None:
    """Reset all singleton services (for testing)."""
    global _query_service
    _query_service = None
