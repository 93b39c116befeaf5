"""
Controller Base Class
Base for concrete controllers that declare their own routes
"""
import json
import platform
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from sanic import Request

from willow.logging import getLogger
from willow.routing import RouteCollection
from willow.support import Mode


class Controller(ABC):
    """
    Controllers declare their routes once with routes() and are
    instantiated per request for routes bound with handler().

    Usage:
        class BlogController(Controller):
            @classmethod
            def routes(cls) -> RouteCollection:
                return RouteCollection.create(cls) \\
                    .GET('blog.show', '/blog/@id').handler('show') \\
                    .GET('blog.info', '/blog/info').static_handler('info') \\
                    .build()

            async def show(self, request, id):
                return {'id': self.path_param('id', 0, pipes.intval)}
    """

    def __init__(self, request: Request):
        self.request = request
        self.log = getLogger(self.log_name())

    @classmethod
    @abstractmethod
    def routes(cls) -> RouteCollection:
        """Define routes for this controller"""

    def log_name(self) -> str:
        """Logger name, override to use a separate logger"""
        return f"willow.controllers.{self.__class__.__name__}"

    # =========================================================================
    # Lifecycle hooks (may be async)
    # =========================================================================

    def before_route(self, request: Request):
        """Runs before the routed action"""

    def after_route(self, request: Request):
        """Runs after the routed action"""

    # =========================================================================
    # Request parameters
    # =========================================================================

    def param(self, name: str, default: Any = None, *pipe: Callable) -> Any:
        """Path parameter, falling back to the query parameter of the same name"""
        return self.path_param(name, self.query_param(name, default, *pipe), *pipe)

    def path_param(self, name: str, default: Any = None, *pipe: Callable) -> Any:
        return _piped(self.request.match_info.get(name), default, pipe)

    def query_param(self, name: str, default: Any = None, *pipe: Callable) -> Any:
        return _piped(self.request.args.get(name), default, pipe)

    def get_form_param(self, name: str, default: Any = None, *pipe: Callable) -> Any:
        form = self.request.form or {}
        return _piped(form.get(name), default, pipe)

    def get_param_map(self) -> Dict[str, Any]:
        """Query parameters overlaid with path parameters"""
        params = {key: self.request.args.get(key) for key in self.request.args}
        params.update(self.request.match_info)
        return params

    def get_body_as_string(self) -> str:
        return self.request.body.decode('utf-8') if self.request.body else ''

    def get_body_as_json(self) -> Any:
        body = self.get_body_as_string()
        return json.loads(body) if body else None

    # =========================================================================
    # Built-in actions
    # =========================================================================

    @staticmethod
    def info(request: Request) -> Dict[str, str]:
        from sanic import __version__ as sanic_version

        return {
            'python': platform.python_version(),
            'mode': Mode.get(),
            'sanic': sanic_version,
        }


def _piped(value: Any, default: Any, pipe) -> Any:
    """
    Run value through each function in turn; a missing value or a
    function returning None yields the default
    """
    if value is None:
        return default
    for fn in pipe:
        value = fn(value)
        if value is None:
            return default
    return value
