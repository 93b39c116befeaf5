"""
Console Kernel
Entry point of the `willow` command line
"""
import asyncio
import importlib
import sys
from typing import Any, Dict, List, Optional, Tuple

from willow.console.command import Command
from willow.console.commands.route_command import RouteListCommand
from willow.exceptions import RoutingException
from willow.routing import Router


class Kernel:
    """
    Usage:
        willow route:list --app=myapp.main:app

    `--app` names a Router, an Application, or a zero-argument factory
    returning either.
    """

    def __init__(self, commands: Optional[List[Command]] = None):
        self.commands: Dict[str, Command] = {}
        for command in commands or [RouteListCommand()]:
            self.commands[command.name] = command

    def show_help(self):
        print("Willow console")
        print()
        for name in sorted(self.commands):
            command = self.commands[name]
            print(f"  {command.signature:<40} {command.description}")

    async def run(self, argv: List[str]) -> int:
        if len(argv) < 2 or argv[1] in ('help', '--help', '-h'):
            self.show_help()
            return 0

        command_name = argv[1]
        if command_name not in self.commands:
            print(f"❌ Unknown command: {command_name}\n")
            self.show_help()
            return 1

        args, kwargs = self._parse_args(argv[2:])
        app_target = kwargs.pop('app', None)
        if app_target:
            try:
                kwargs['router'] = load_router(app_target)
            except (ImportError, AttributeError, ValueError, RoutingException) as e:
                print(f"❌ Cannot load routes from '{app_target}': {e}")
                return 1

        exit_code = await self.commands[command_name].handle(*args, **kwargs)
        return exit_code if exit_code is not None else 0

    @staticmethod
    def _parse_args(argv: List[str]) -> Tuple[List[str], Dict[str, Any]]:
        """
        Parse command line arguments
        Returns tuple of (positional_args, keyword_args)
        """
        args = []
        kwargs = {}
        for arg in argv:
            if arg.startswith('--'):
                if '=' in arg:
                    key, value = arg[2:].split('=', 1)
                    kwargs[key.replace('-', '_')] = value
                else:
                    kwargs[arg[2:].replace('-', '_')] = True
            else:
                args.append(arg)
        return args, kwargs


def load_router(target: str) -> Router:
    """
    Resolve 'module:attribute' to a Router

    Raises:
        ValueError: the target is malformed or names something else
    """
    from willow.application import Application

    module_name, _, attribute = target.partition(':')
    if not module_name or not attribute:
        raise ValueError("expected 'module:attribute'")

    obj = getattr(importlib.import_module(module_name), attribute)
    if callable(obj) and not isinstance(obj, (Router, Application, type)):
        obj = obj()

    if isinstance(obj, Router):
        return obj
    if isinstance(obj, Application):
        return obj.get_router() or Router.of(obj.collections)
    raise ValueError(f"'{attribute}' is not a Router or an Application")


def main(argv: Optional[List[str]] = None) -> int:
    return asyncio.run(Kernel().run(argv if argv is not None else sys.argv))


if __name__ == '__main__':
    sys.exit(main())
