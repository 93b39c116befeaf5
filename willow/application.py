"""
Framework Application Class
"""
import logging
from typing import Any, Iterable, List, Mapping, Optional

from sanic import Sanic

from willow.defaults import DEFAULT_APP_NAME, DEFAULT_LOG_NAME
from willow.exceptions import RoutingException
from willow.exceptions.error_handler import ErrorHandler
from willow.logging import ROOT_LOGGER, LoggerConfig
from willow.routing import RouteCollection, Router
from willow.routing.sanic_registrar import SanicRouteRegistrar
from willow.support import Config, EnvHelper


class Application:
    """
    Wires configuration, logging, error handling and the route table
    into a Sanic app

    Usage:
        app = Application('blog', [HomeController.routes(), BlogController.routes()])
        app.equip()
        app.run()

    The Router is built once by equip() and handed to request code through
    `sanic_app.ctx.router`.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        collections: Iterable[RouteCollection] = (),
        controllers: Iterable[type] = (),
        config: Optional[Mapping[str, Mapping[str, Any]]] = None,
        env_file: Optional[str] = None,
        sanic_app: Optional[Sanic] = None,
    ):
        """
        Args:
            name: Sanic app name (default: app.name config or 'willow')
            collections: Route collections of every controller, in order
            controllers: Extra controllers reachable from dynamic handlers
            config: Config namespaces to merge, e.g. {'app': {'mode': 'prod'}}
            env_file: .env file to load before reading config
            sanic_app: Existing Sanic app to equip instead of creating one
        """
        self.collections: List[RouteCollection] = list(collections)
        self.controllers: List[type] = list(controllers)
        self.config = config or {}
        self.env_file = env_file
        self.name = name
        self.sanic_app = sanic_app
        self.router: Optional[Router] = None
        self.logger: Optional[logging.Logger] = None
        self.error_handler: Optional[ErrorHandler] = None
        self.equipped = False

    def equip(self) -> Sanic:
        """
        Load config, set up logging and error handling, build the route
        table and register it with Sanic

        Raises:
            RoutingException: the route table is malformed; the
                application must not serve
        """
        if self.equipped:
            return self.sanic_app

        self.configure()
        self.init_logger()

        if self.sanic_app is None:
            self.sanic_app = Sanic(self.name or Config.get('app.name', DEFAULT_APP_NAME))

        self.set_error_handler()
        self.init_router()

        self.equipped = True
        return self.sanic_app

    def configure(self):
        """Load the .env file and merge config namespaces"""
        EnvHelper.load(self.env_file)
        for file_name, values in self.config.items():
            Config.merge(file_name, values)

    def init_logger(self):
        """Set up the app logger; framework modules log beneath it"""
        self.logger = LoggerConfig.setup_logger(
            ROOT_LOGGER,
            format_type=Config.get('app.log_format', 'text'),
            file_name=Config.get('app.log_name', DEFAULT_LOG_NAME),
        )

    def set_error_handler(self):
        self.error_handler = ErrorHandler(
            debug=bool(Config.get('app.debug', False)),
            include_trace=bool(Config.get('app.debug', False)),
        ).install(self.sanic_app)

    def init_router(self):
        try:
            self.router = Router.of(self.collections)
        except RoutingException:
            self.logger.exception("Route table failed to build")
            raise

        registrar = SanicRouteRegistrar(self.sanic_app, self.controllers)
        count = registrar.register(self.router)
        self.sanic_app.ctx.router = self.router
        self.logger.info("Registered %d of %d routes with Sanic", count, len(self.router))

    def get_router(self) -> Router:
        return self.router

    def get_logger(self) -> logging.Logger:
        return self.logger

    def run(self, host=None, port=None, **kwargs):
        """Run the Sanic server"""
        from willow.defaults import DEFAULT_HOST, DEFAULT_PORT

        sanic_app = self.equip()
        sanic_app.run(host=host or DEFAULT_HOST, port=port or DEFAULT_PORT, **kwargs)
