"""
Routing Package
Fluent route declarations and the aggregated route table

The Sanic adapter lives in willow.routing.sanic_registrar and is not
imported here, so the table can be built without the host engine.
"""
from willow.routing.handler import (
    HandlerKind,
    InstanceMethod,
    StaticMethod,
    RawExpression,
    Callback,
)
from willow.routing.route import Route, RouteFlag
from willow.routing.route_builder_scope import RouteBuilderScope
from willow.routing.route_collection import RouteCollection
from willow.routing.registration import RouteRegistration
from willow.routing.router import Router

__all__ = [
    'HandlerKind',
    'InstanceMethod',
    'StaticMethod',
    'RawExpression',
    'Callback',
    'Route',
    'RouteFlag',
    'RouteBuilderScope',
    'RouteCollection',
    'RouteRegistration',
    'Router',
]
