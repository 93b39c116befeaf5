"""
Route Collection
The ordered routes declared by one controller class
"""
from typing import Any, Dict, Iterator, List, Optional

from willow.exceptions import RouteFrozen
from willow.logging import getLogger
from willow.routing.route import Route
from willow.routing.route_builder_scope import RouteBuilderScope

logger = getLogger(__name__)


class RouteCollection:
    """
    Collection of routes owned by one controller

    Usage:
        @classmethod
        def routes(cls) -> RouteCollection:
            return RouteCollection.create(cls) \\
                .GET('home', '/').handler('index') \\
                .GET('about', '/about').static_handler('about') \\
                .build()

    Names are not checked for uniqueness here; that is a Router-wide
    property enforced when collections are aggregated.
    """

    def __init__(self, owner: Optional[type] = None):
        """
        Initialize an empty route collection

        Args:
            owner: Controller class the routes belong to
        """
        self._owner = owner
        self._routes: List[Route] = []
        self._built = False

    @classmethod
    def create(cls, owner: Optional[type]) -> 'RouteCollection':
        return cls(owner)

    # =========================================================================
    # Route Registration Methods
    # =========================================================================

    def route(self, method: str, name: str, pattern: str) -> RouteBuilderScope:
        """
        Start a new route and return a scope over it

        Raises:
            InvalidArgument: empty method, name or pattern (nothing is appended)
            RouteFrozen: the collection was already built
        """
        if self._built:
            raise RouteFrozen(
                f"Cannot add route '{name}': routes for {self._owner_name()} are already built"
            )

        route = Route(method, name, pattern, self._owner)
        self._routes.append(route)
        logger.debug("Declared route %r for %s", route, self._owner_name())
        return RouteBuilderScope(route, self)

    def GET(self, name: str, pattern: str) -> RouteBuilderScope:
        """Register a GET route"""
        return self.route('GET', name, pattern)

    def POST(self, name: str, pattern: str) -> RouteBuilderScope:
        """Register a POST route"""
        return self.route('POST', name, pattern)

    def PUT(self, name: str, pattern: str) -> RouteBuilderScope:
        """Register a PUT route"""
        return self.route('PUT', name, pattern)

    def DELETE(self, name: str, pattern: str) -> RouteBuilderScope:
        """Register a DELETE route"""
        return self.route('DELETE', name, pattern)

    def build(self) -> 'RouteCollection':
        """Finalize the collection; its routes become read-only"""
        for route in self._routes:
            route.freeze()
        self._built = True
        return self

    # =========================================================================
    # Introspection
    # =========================================================================

    def get_class(self) -> Optional[type]:
        return self._owner

    def get_routes(self) -> List[Route]:
        """Get all routes in declaration order"""
        return list(self._routes)

    def is_built(self) -> bool:
        return self._built

    def count(self) -> int:
        return len(self._routes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'owner': self._owner_name(),
            'total': len(self._routes),
            'built': self._built,
            'routes': [route.to_dict() for route in self._routes],
        }

    def _owner_name(self) -> str:
        return self._owner.__qualname__ if self._owner else '<no owner>'

    def __iter__(self) -> Iterator[Route]:
        """Make collection iterable"""
        return iter(self._routes)

    def __len__(self) -> int:
        """Get number of routes"""
        return len(self._routes)

    def __repr__(self) -> str:
        return f"<RouteCollection {self._owner_name()} ({len(self._routes)} routes)>"
