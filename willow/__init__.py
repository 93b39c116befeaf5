"""
Willow
Named, fluent route declarations for Sanic controllers
"""
from willow.routing import (
    Route,
    RouteFlag,
    RouteBuilderScope,
    RouteCollection,
    RouteRegistration,
    Router,
)
from willow.exceptions import (
    InvalidArgument,
    DuplicateRouteName,
    RouteFrozen,
)

__version__ = '0.1.0'

__all__ = [
    'Route',
    'RouteFlag',
    'RouteBuilderScope',
    'RouteCollection',
    'RouteRegistration',
    'Router',
    'InvalidArgument',
    'DuplicateRouteName',
    'RouteFrozen',
]
