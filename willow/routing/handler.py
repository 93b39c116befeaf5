"""
Route Handlers
The four ways a route can be bound to executable code
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union


class HandlerKind(Enum):
    """Handler binding strategy"""
    INSTANCE_METHOD = 'instance'
    STATIC_METHOD = 'static'
    RAW_EXPRESSION = 'raw'
    CALLBACK = 'callback'


@dataclass(frozen=True)
class InstanceMethod:
    """
    Action invoked on a fresh controller instance

    The host builds the owning controller per request so its lifecycle
    hooks (before_route, after_route, per-instance logger) run around
    the action.
    """
    action: str
    kind = HandlerKind.INSTANCE_METHOD

    @property
    def value(self) -> str:
        return self.action

    def reference(self, owner: Optional[type]) -> str:
        return f"{qualified_name(owner)}->{self.action}"


@dataclass(frozen=True)
class StaticMethod:
    """Action invoked on the controller class, no instance is built"""
    action: str
    kind = HandlerKind.STATIC_METHOD

    @property
    def value(self) -> str:
        return self.action

    def reference(self, owner: Optional[type]) -> str:
        return f"{qualified_name(owner)}::{self.action}"


@dataclass(frozen=True)
class RawExpression:
    """
    Handler expression handed to the host verbatim

    May contain @tokens resolved from path parameters at request time,
    e.g. '@controller->@action'.
    """
    expression: str
    kind = HandlerKind.RAW_EXPRESSION

    @property
    def value(self) -> str:
        return self.expression

    def reference(self, owner: Optional[type]) -> str:
        return self.expression


@dataclass(frozen=True)
class Callback:
    """Function invoked directly by the host, bypassing controllers"""
    fn: Callable
    kind = HandlerKind.CALLBACK

    @property
    def value(self) -> Callable:
        return self.fn

    def reference(self, owner: Optional[type]) -> Callable:
        return self.fn


Handler = Union[InstanceMethod, StaticMethod, RawExpression, Callback]


def qualified_name(owner: Optional[type]) -> str:
    """Dotted import path of a controller class"""
    if owner is None:
        return ''
    return f"{owner.__module__}.{owner.__qualname__}"
