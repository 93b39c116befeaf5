"""
Console Package
"""
from willow.console.command import Command
from willow.console.kernel import Kernel, main

__all__ = [
    'Command',
    'Kernel',
    'main',
]
