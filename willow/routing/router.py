"""
Router
Merges the route collections of every controller into one read-only table
"""
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from willow.exceptions import DuplicateRouteName, InvalidArgument
from willow.logging import getLogger
from willow.routing.registration import RouteRegistration
from willow.routing.route import Route
from willow.routing.route_collection import RouteCollection

logger = getLogger(__name__)

# get_routes() default; None is a valid owner for callback-only collections
_ALL_OWNERS = object()


class Router:
    """
    Aggregated, name-unique route table

    Built once at startup with Router.of() and never mutated afterwards,
    so request workers may read it concurrently without locking.

    Usage:
        router = Router.of([HomeController.routes(), BlogController.routes()])
        router.get_route('home')                # Route or None
        router.get_routes(BlogController)       # BlogController's routes, in order
        router.register(lambda row: engine.route(row.expression(), row.handler))
    """

    def __init__(
        self,
        routes: Tuple[Route, ...],
        by_name: Dict[str, Route],
        by_owner: Dict[Optional[type], Tuple[Route, ...]],
    ):
        """Use Router.of() to build a router from route collections"""
        self._routes = routes
        self._by_name = by_name
        self._by_owner = by_owner

    @classmethod
    def of(cls, collections: Iterable[RouteCollection]) -> 'Router':
        """
        Build a router from route collections

        Routes keep collection order, then declaration order within each
        collection. Unbuilt collections are finalized here.

        Raises:
            DuplicateRouteName: two routes share a name
            InvalidArgument: an element is not a RouteCollection
        """
        routes: List[Route] = []
        by_name: Dict[str, Route] = {}
        by_owner: Dict[Optional[type], List[Route]] = {}

        for collection in collections:
            if not isinstance(collection, RouteCollection):
                raise InvalidArgument(f"Expected a RouteCollection, got {collection!r}")
            if not collection.is_built():
                collection.build()

            for route in collection:
                name = route.get_name()
                if name in by_name:
                    raise DuplicateRouteName(name, by_name[name].get_owner(), route.get_owner())
                by_name[name] = route
                by_owner.setdefault(route.get_owner(), []).append(route)
                routes.append(route)

        logger.debug("Route table built: %d routes from %d controllers", len(routes), len(by_owner))
        return cls(
            tuple(routes),
            by_name,
            {owner: tuple(owned) for owner, owned in by_owner.items()},
        )

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_routes(self, owner: Optional[type] = _ALL_OWNERS) -> List[Route]:
        """
        Get routes in table order

        Args:
            owner: Only return routes declared by this controller class
                (None selects collections created without an owner)

        Returns:
            List of routes (empty for an unknown owner)
        """
        if owner is _ALL_OWNERS:
            return list(self._routes)
        return list(self._by_owner.get(owner, ()))

    def get_route(self, name: str) -> Optional[Route]:
        """Get a route by its exact name, or None"""
        return self._by_name.get(name)

    def has(self, name: str) -> bool:
        """Check if a named route exists"""
        return name in self._by_name

    def get_owners(self) -> List[Optional[type]]:
        """Controller classes in the order their first route appears"""
        return list(self._by_owner)

    # =========================================================================
    # Host engine output
    # =========================================================================

    def registrations(self) -> List[RouteRegistration]:
        """One registration row per route, in table order"""
        return [RouteRegistration.from_route(route) for route in self._routes]

    def register(self, register: Callable[[RouteRegistration], Any]) -> int:
        """
        Emit every route to the host engine

        Args:
            register: Called once per registration row, in table order

        Returns:
            Number of rows emitted
        """
        count = 0
        for registration in self.registrations():
            register(registration)
            logger.debug("Registered %s", registration.expression())
            count += 1
        return count

    def to_dict(self) -> Dict[str, Any]:
        by_method: Dict[str, int] = {}
        for route in self._routes:
            by_method[route.get_method()] = by_method.get(route.get_method(), 0) + 1

        return {
            'total': len(self._routes),
            'routes': [route.to_dict() for route in self._routes],
            'by_method': by_method,
            'controllers': len(self._by_owner),
        }

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"<Router ({len(self._routes)} routes)>"
