from willow.console.commands.route_command import RouteListCommand

__all__ = ['RouteListCommand']
