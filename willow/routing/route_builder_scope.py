"""
Route Builder Scope
Fluent cursor over the route most recently started by a RouteCollection
"""
from typing import TYPE_CHECKING, Callable

from willow.exceptions import InvalidArgument
from willow.routing.handler import Callback, InstanceMethod, RawExpression, StaticMethod
from willow.routing.route import Route, RouteFlag

if TYPE_CHECKING:
    from willow.routing.route_collection import RouteCollection


class RouteBuilderScope:
    """
    Chains attribute setters onto one Route, then either keeps chaining or
    starts the next route through the owning collection.

    Usage:
        RouteCollection.create(BlogController) \\
            .GET('blog.index', '/blog').handler('index').ttl(60) \\
            .POST('blog.store', '/blog').handler('store').ajax() \\
            .build()
    """

    def __init__(self, route: Route, routes: 'RouteCollection'):
        self._route = route
        self._routes = routes

    # =========================================================================
    # Handlers (last one set wins)
    # =========================================================================

    def handler(self, action: str) -> 'RouteBuilderScope':
        """Invoke `action` on a fresh instance of the owning controller"""
        self._route.set_handler(InstanceMethod(_action_name(action)))
        return self

    def static_handler(self, action: str) -> 'RouteBuilderScope':
        """Invoke `action` on the controller class, for stateless endpoints"""
        self._route.set_handler(StaticMethod(_action_name(action)))
        return self

    def dynamic_handler(self, expression: str) -> 'RouteBuilderScope':
        """
        Set the handler expression directly

        Useful for fully data-driven routing:
            .GET('public', '/public/@controller/@action') \\
            .dynamic_handler('@controller->@action')
        """
        if not expression or not isinstance(expression, str):
            raise InvalidArgument("Handler expression must be a non-empty string")
        self._route.set_handler(RawExpression(expression))
        return self

    def callback(self, fn: Callable) -> 'RouteBuilderScope':
        if not callable(fn):
            raise InvalidArgument(f"Callback must be callable, got {fn!r}")
        self._route.set_handler(Callback(fn))
        return self

    # =========================================================================
    # Attributes
    # =========================================================================

    def ttl(self, seconds: int) -> 'RouteBuilderScope':
        self._route.set_ttl(seconds)
        return self

    def kbps(self, kbps: int) -> 'RouteBuilderScope':
        self._route.set_kbps(kbps)
        return self

    def ajax(self) -> 'RouteBuilderScope':
        self._route.add_flag(RouteFlag.AJAX)
        return self

    def cli(self) -> 'RouteBuilderScope':
        self._route.add_flag(RouteFlag.CLI)
        return self

    def sync(self) -> 'RouteBuilderScope':
        self._route.add_flag(RouteFlag.SYNC)
        return self

    # =========================================================================
    # Same contract as RouteCollection, for the fluent chain
    # =========================================================================

    def route(self, method: str, name: str, pattern: str) -> 'RouteBuilderScope':
        return self._routes.route(method, name, pattern)

    def GET(self, name: str, pattern: str) -> 'RouteBuilderScope':
        return self._routes.GET(name, pattern)

    def POST(self, name: str, pattern: str) -> 'RouteBuilderScope':
        return self._routes.POST(name, pattern)

    def PUT(self, name: str, pattern: str) -> 'RouteBuilderScope':
        return self._routes.PUT(name, pattern)

    def DELETE(self, name: str, pattern: str) -> 'RouteBuilderScope':
        return self._routes.DELETE(name, pattern)

    def get_route(self) -> Route:
        return self._route

    def build(self) -> 'RouteCollection':
        return self._routes.build()

    def __repr__(self) -> str:
        return f"<RouteBuilderScope {self._route!r}>"


def _action_name(action: str) -> str:
    if not action or not isinstance(action, str):
        raise InvalidArgument("Handler action must be a non-empty string")
    return action
