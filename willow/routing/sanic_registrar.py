"""
Sanic Route Registrar
Registers a Router's table with a Sanic application
"""
import inspect
import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from sanic import Request, Sanic
from sanic.exceptions import NotFound
from sanic.response import HTTPResponse, empty, html, json

from willow.defaults import AJAX_HEADER, AJAX_HEADER_VALUE
from willow.logging import getLogger
from willow.routing.handler import (
    Callback,
    Handler,
    InstanceMethod,
    RawExpression,
    StaticMethod,
    qualified_name,
)
from willow.routing.registration import RouteRegistration
from willow.routing.route import Route, RouteFlag
from willow.routing.router import Router

logger = getLogger(__name__)

_TOKEN = re.compile(r'@(\w+)')
_BRACE_PARAM = re.compile(r'\{(\w+)\??}')


def to_sanic_uri(pattern: str) -> str:
    """
    Convert a route pattern to Sanic's syntax

    '/blog/@id' and '/blog/{id}' become '/blog/<id>'; a trailing '*'
    becomes '<path:path>'.
    """
    uri = _TOKEN.sub(r'<\1>', pattern)
    uri = _BRACE_PARAM.sub(r'<\1>', uri)
    if uri.endswith('*'):
        uri = uri[:-1] + '<path:path>'
    if not uri.startswith('/'):
        uri = '/' + uri
    return uri


def is_ajax(request: Request) -> bool:
    return request.headers.get(AJAX_HEADER) == AJAX_HEADER_VALUE


def select_route(routes: Sequence[Route], ajax: bool) -> Optional[Route]:
    """
    Pick the route answering a request among routes sharing method and URI

    An AJAX request prefers an [ajax] route, a plain request a [sync] one;
    unflagged routes answer either. None if every route refuses.
    """
    preferred, refused = (RouteFlag.AJAX, RouteFlag.SYNC) if ajax else (RouteFlag.SYNC, RouteFlag.AJAX)
    fallback = None
    for route in routes:
        if route.has_flag(refused):
            continue
        if route.has_flag(preferred):
            return route
        if fallback is None:
            fallback = route
    return fallback


def to_response(result: Any) -> HTTPResponse:
    """Wrap plain handler results the way Sanic expects"""
    if isinstance(result, HTTPResponse):
        return result
    if result is None:
        return empty()
    if isinstance(result, (dict, list)):
        return json(result)
    return html(str(result))


async def _call(fn: Callable, *args, **kwargs) -> Any:
    result = fn(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


class SanicRouteRegistrar:
    """
    Turns each registration row into a Sanic route

    Usage:
        registrar = SanicRouteRegistrar(app, controllers=[BlogController])
        registrar.register(router)

    Controllers listed here (plus every route owner) can be named by
    dynamic handler expressions such as '@controller->@action'.
    """

    def __init__(self, sanic_app: Sanic, controllers: Iterable[type] = ()):
        self.sanic_app = sanic_app
        self._controllers: Dict[str, type] = {}
        for controller in controllers:
            self.add_controller(controller)

    def add_controller(self, controller: type) -> 'SanicRouteRegistrar':
        """Make a controller resolvable by class name, lower-cased name or dotted path"""
        for key in (controller.__name__, controller.__name__.lower(), qualified_name(controller)):
            self._controllers.setdefault(key, controller)
        return self

    def resolve_controller(self, name: str) -> Optional[type]:
        return self._controllers.get(name) or self._controllers.get(name.lower())

    def register(self, router: Router) -> int:
        """
        Register every HTTP route of the router with Sanic

        Routes sharing a method and URI (an AJAX variant next to a page,
        say) become one Sanic route that picks the variant per request.

        Returns:
            Number of routes served (CLI-only and handler-less routes are skipped)
        """
        for owner in router.get_owners():
            if owner is not None:
                self.add_controller(owner)

        groups: Dict[Tuple[str, str], List[Route]] = {}

        def collect(registration: RouteRegistration):
            route = router.get_route(registration.name)
            if self.accepts(registration, route):
                key = (registration.method, to_sanic_uri(registration.pattern))
                groups.setdefault(key, []).append(route)

        router.register(collect)

        for (method, uri), routes in groups.items():
            self.sanic_app.add_route(
                self.make_handler(*routes),
                uri,
                methods=[method],
                name=routes[0].get_name(),
            )
            if len(routes) > 1:
                logger.debug(
                    "Routes %s share %s %s",
                    ', '.join(route.get_name() for route in routes), method, uri,
                )
        return sum(len(routes) for routes in groups.values())

    @staticmethod
    def accepts(registration: RouteRegistration, route: Route) -> bool:
        """False for rows Sanic should not serve"""
        if route.has_flag(RouteFlag.CLI):
            logger.debug("Skipping CLI route %s", registration.expression())
            return False
        if route.get_handler_object() is None:
            logger.warning("Route '%s' has no handler, skipping", registration.name)
            return False
        return True

    # =========================================================================
    # Handler construction
    # =========================================================================

    def make_handler(self, *routes: Route) -> Callable:
        """Build the Sanic handler for routes sharing one method and URI"""
        dispatchers = {
            route.get_name(): self._dispatcher(route.get_handler_object(), route.get_owner())
            for route in routes
        }

        async def handler(request: Request, **params):
            route = select_route(routes, is_ajax(request))
            if route is None:
                raise NotFound(f"No route at {request.path} answers this request")

            request.ctx.route = route
            response = to_response(await dispatchers[route.get_name()](request, params))

            ttl = route.get_ttl()
            if ttl and request.method == 'GET' and 'Cache-Control' not in response.headers:
                response.headers['Cache-Control'] = f"public, max-age={ttl}"
            return response

        handler.__name__ = f"willow_{routes[0].get_name()}".replace('.', '_')
        return handler

    def _dispatcher(self, handler: Handler, owner: Optional[type]) -> Callable:
        if isinstance(handler, InstanceMethod):
            return lambda request, params: self._call_instance(owner, handler.action, request, params)
        if isinstance(handler, StaticMethod):
            return lambda request, params: self._call_static(owner, handler.action, request, params)
        if isinstance(handler, Callback):
            return lambda request, params: _call(handler.fn, request, **params)
        if isinstance(handler, RawExpression):
            return lambda request, params: self._call_expression(handler.expression, request, params)
        raise TypeError(f"Unknown handler {handler!r}")

    async def _call_instance(self, owner: type, action: str, request: Request, params: Dict[str, Any]) -> Any:
        controller = self._instantiate(owner, request)
        method = _public_attribute(controller, action)

        before = getattr(controller, 'before_route', None)
        if before is not None:
            await _call(before, request)

        result = await _call(method, request, **params)

        after = getattr(controller, 'after_route', None)
        if after is not None:
            await _call(after, request)
        return result

    async def _call_static(self, owner: type, action: str, request: Request, params: Dict[str, Any]) -> Any:
        return await _call(_public_attribute(owner, action), request, **params)

    async def _call_expression(self, expression: str, request: Request, params: Dict[str, Any]) -> Any:
        resolved, remaining = self.resolve_expression(expression, params)

        if '->' in resolved:
            class_name, action = resolved.split('->', 1)
            call = self._call_instance
        elif '::' in resolved:
            class_name, action = resolved.split('::', 1)
            call = self._call_static
        else:
            raise NotFound(f"Cannot dispatch handler expression '{resolved}'")

        controller = self.resolve_controller(class_name)
        if controller is None:
            raise NotFound(f"No controller named '{class_name}'")
        if _framework_member(controller, action):
            raise NotFound(f"No action named '{action}'")
        return await call(controller, action, request, remaining)

    @staticmethod
    def resolve_expression(expression: str, params: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        """
        Substitute @tokens from path parameters

        Returns:
            The resolved expression and the parameters not consumed by it
        """
        used = set()

        def substitute(match):
            name = match.group(1)
            if name not in params:
                return match.group(0)
            used.add(name)
            return str(params[name])

        resolved = _TOKEN.sub(substitute, expression)
        remaining = {key: value for key, value in params.items() if key not in used}
        return resolved, remaining

    @staticmethod
    def _instantiate(owner: type, request: Request) -> Any:
        from willow.controller import Controller

        if isinstance(owner, type) and issubclass(owner, Controller):
            return owner(request)
        return owner()


_HOOKS = frozenset({'routes', 'log_name', 'before_route', 'after_route'})


def _framework_member(owner: type, action: str) -> bool:
    """True for hooks and for members inherited from Controller itself"""
    from willow.controller import Controller

    if action in _HOOKS:
        return True
    for klass in getattr(owner, '__mro__', ()):
        if action in vars(klass):
            return klass in Controller.__mro__
    return False


def _public_attribute(target: Any, action: str) -> Callable:
    # actions can come from the URL through dynamic handlers
    if not action or action.startswith('_'):
        raise NotFound(f"No action named '{action}'")
    method = getattr(target, action, None)
    if not callable(method):
        raise NotFound(f"No action named '{action}'")
    return method
