"""
Exceptions Package
Routing errors and centralized error rendering
"""
from willow.exceptions.custom import (
    FrameworkException,
    RoutingException,
    InvalidArgument,
    DuplicateRouteName,
    RouteFrozen,
)

__all__ = [
    'FrameworkException',
    'RoutingException',
    'InvalidArgument',
    'DuplicateRouteName',
    'RouteFrozen',
]
