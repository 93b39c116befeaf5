"""
Route Registration
The row handed to the host dispatch engine for each route
"""
from typing import Callable, NamedTuple, Union

from willow.routing.route import Route


class RouteRegistration(NamedTuple):
    """
    (method, name, pattern, type_suffix, handler, ttl, kbps)

    `handler` is a string token for controller and raw handlers and the
    function itself for callbacks. Adapters that need the source Route
    look it up by name on the Router.
    """
    method: str
    name: str
    pattern: str
    type_suffix: str
    handler: Union[str, Callable, None]
    ttl: int
    kbps: int

    @classmethod
    def from_route(cls, route: Route) -> 'RouteRegistration':
        return cls(
            route.get_method(),
            route.get_name(),
            route.get_pattern(),
            route.get_type(),
            route.get_handler(),
            route.get_ttl(),
            route.get_kbps(),
        )

    def expression(self) -> str:
        """
        Engine route string

        Example:
            'GET @home: /'
            'POST @items.store: /items [ajax]'
        """
        return f"{self.method} @{self.name}: {self.pattern}{self.type_suffix}"
