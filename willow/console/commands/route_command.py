"""
Route List Command
Display the route table
"""
from willow.console.command import Command
from willow.routing import Router


class RouteListCommand(Command):
    """List all routes in table order"""

    name = "route:list"
    description = "List all declared routes"
    signature = "route:list --app=module:attribute"

    def __init__(self, router: Router = None, out=None):
        super().__init__(out)
        self.router = router

    async def handle(self, router: Router = None, **kwargs):
        router = router or self.router
        if router is None or len(router) == 0:
            self.error("No routes registered")
            return 1

        table = router.to_dict()
        rows = [
            (
                route['method'],
                route['name'],
                f"{route['pattern']}{route['type']}",
                route['handler'] or '-',
                route['ttl'],
                route['kbps'],
            )
            for route in table['routes']
        ]

        self.table(['Method', 'Name', 'Pattern', 'Handler', 'TTL', 'KBps'], rows)
        self.line()
        self.success(f"Showing {table['total']} routes from {table['controllers']} controllers")
        return 0
