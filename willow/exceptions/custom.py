"""
Custom Exception Classes
Framework-specific exceptions with HTTP status codes
"""
from typing import Optional


class FrameworkException(Exception):
    """Base exception for all framework exceptions"""
    status_code = 500
    message = "An error occurred"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.__class__.message
        self.status_code = status_code or self.__class__.status_code
        super().__init__(self.message)


class RoutingException(FrameworkException):
    """
    Base exception for route table construction errors

    A malformed route table is a configuration bug, so these keep the
    default 500 status and are meant to abort application startup.
    """
    message = "Invalid route table"


class InvalidArgument(RoutingException, ValueError):
    """
    Invalid builder argument

    Raised immediately by the offending builder call: empty method, name or
    pattern, negative ttl/kbps, empty action or a non-callable callback.

    Example:
        raise InvalidArgument("Route name must not be empty")
    """
    message = "Invalid argument"


class DuplicateRouteName(RoutingException):
    """
    Two routes share a name inside one Router

    Example:
        raise DuplicateRouteName('home', HomeController, BlogController)
    """
    message = "Duplicate route name"

    def __init__(self, name: str, existing_owner: type, duplicate_owner: type):
        self.name = name
        self.existing_owner = existing_owner
        self.duplicate_owner = duplicate_owner
        super().__init__(
            f"Duplicate route name '{name}': declared by "
            f"{_owner_label(existing_owner)} and {_owner_label(duplicate_owner)}"
        )


class RouteFrozen(RoutingException):
    """
    Mutation attempted after a route or collection was finalized

    Example:
        raise RouteFrozen("Route 'home' is read-only")
    """
    message = "Route table is read-only"


def _owner_label(owner) -> str:
    if owner is None:
        return '<no owner>'
    return f"{owner.__module__}.{owner.__qualname__}"
