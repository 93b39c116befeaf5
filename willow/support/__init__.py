"""
Framework Support Classes
"""

from willow.support.env_helper import EnvHelper
from willow.support.config import Config
from willow.support.mode import Mode
from willow.support import pipes

__all__ = [
    'EnvHelper',
    'Config',
    'Mode',
    'pipes',
]
