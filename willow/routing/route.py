"""
Route Class
Represents a single named endpoint declared by a controller
"""
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Optional, Set, Union

from willow.defaults import ROUTE_TYPE_MARKERS
from willow.exceptions import InvalidArgument, RouteFrozen
from willow.routing.handler import Handler, HandlerKind


class RouteFlag(Enum):
    """Behavioral flags, declared in the order their markers are emitted"""
    AJAX = 'ajax'
    SYNC = 'sync'
    CLI = 'cli'

    @property
    def marker(self) -> str:
        return ROUTE_TYPE_MARKERS[self.value]


class Route:
    """
    Route record

    Created by a RouteCollection and mutated only through its
    RouteBuilderScope. Once frozen (collection built or aggregated by a
    Router) every setter raises RouteFrozen.

    Usage:
        route = Route('GET', 'home', '/', HomeController)
        route.set_handler(InstanceMethod('index'))
        route.get_handler()  # 'app.controllers.HomeController->index'
    """

    def __init__(self, method: str, name: str, pattern: str, owner: Optional[type] = None):
        """
        Initialize a Route instance

        Args:
            method: HTTP method (GET, POST, etc.)
            name: Route name, unique within a Router
            pattern: URL pattern, opaque to the routing layer
            owner: Controller class that declared the route
        """
        if not method or not isinstance(method, str):
            raise InvalidArgument("Route method must be a non-empty string")
        if not name or not isinstance(name, str):
            raise InvalidArgument("Route name must be a non-empty string")
        if not pattern or not isinstance(pattern, str):
            raise InvalidArgument(f"Route '{name}' pattern must be a non-empty string")

        self._method = method.upper()
        self._name = name
        self._pattern = pattern
        self._owner = owner
        self._handler: Optional[Handler] = None
        self._ttl = 0
        self._kbps = 0
        self._flags: Set[RouteFlag] = set()
        self._frozen = False

    # =========================================================================
    # Mutators (used by RouteBuilderScope)
    # =========================================================================

    def set_handler(self, handler: Handler) -> 'Route':
        """Replace the handler; the last one set wins"""
        self._ensure_mutable()
        self._handler = handler
        return self

    def set_ttl(self, seconds: int) -> 'Route':
        """Cache lifetime in seconds, 0 disables caching"""
        self._ensure_mutable()
        self._ttl = _non_negative('ttl', seconds)
        return self

    def set_kbps(self, kbps: int) -> 'Route':
        """Bandwidth limit, 0 disables throttling"""
        self._ensure_mutable()
        self._kbps = _non_negative('kbps', kbps)
        return self

    def add_flag(self, flag: RouteFlag) -> 'Route':
        self._ensure_mutable()
        self._flags.add(flag)
        return self

    def freeze(self) -> 'Route':
        self._frozen = True
        return self

    def is_frozen(self) -> bool:
        return self._frozen

    def _ensure_mutable(self):
        if self._frozen:
            raise RouteFrozen(f"Route '{self._name}' is read-only")

    # =========================================================================
    # Accessors
    # =========================================================================

    def get_method(self) -> str:
        return self._method

    def get_name(self) -> str:
        return self._name

    def get_pattern(self) -> str:
        return self._pattern

    def get_owner(self) -> Optional[type]:
        return self._owner

    def get_ttl(self) -> int:
        return self._ttl

    def get_kbps(self) -> int:
        return self._kbps

    def get_flags(self) -> FrozenSet[RouteFlag]:
        return frozenset(self._flags)

    def has_flag(self, flag: RouteFlag) -> bool:
        return flag in self._flags

    def get_handler_object(self) -> Optional[Handler]:
        return self._handler

    def get_handler_kind(self) -> Optional[HandlerKind]:
        return self._handler.kind if self._handler else None

    def get_handler_value(self) -> Union[str, Callable, None]:
        return self._handler.value if self._handler else None

    def get_type(self) -> str:
        """
        Type suffix for the engine route string

        One marker per active flag, always in AJAX, SYNC, CLI order.

        Returns:
            e.g. ' [ajax]', ' [ajax] [cli]' or ''
        """
        return ''.join(flag.marker for flag in RouteFlag if flag in self._flags)

    def get_handler(self) -> Union[str, Callable, None]:
        """
        Handler reference handed to the host engine

        Returns:
            'Owner->action', 'Owner::action', the raw expression,
            the callback itself, or None when no handler was set
        """
        if self._handler is None:
            return None
        return self._handler.reference(self._owner)

    def to_dict(self) -> Dict[str, Any]:
        handler = self.get_handler()
        if callable(handler):
            handler = getattr(handler, '__qualname__', repr(handler))
        return {
            'method': self._method,
            'name': self._name,
            'pattern': self._pattern,
            'type': self.get_type(),
            'handler': handler,
            'handler_kind': self._handler.kind.value if self._handler else None,
            'ttl': self._ttl,
            'kbps': self._kbps,
            'flags': sorted(flag.value for flag in self._flags),
            'owner': self._owner.__qualname__ if self._owner else None,
        }

    def __repr__(self) -> str:
        return f"<Route [{self._method}] @{self._name}: {self._pattern}{self.get_type()}>"


def _non_negative(field: str, value: int) -> int:
    # bool is an int subclass, but ttl(True) is a caller bug
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{field} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidArgument(f"{field} must not be negative, got {value}")
    return value
