"""
EnvHelper - Read .env files into the environment
"""

import os
import threading
from pathlib import Path
from typing import Any, Optional, Union

from dotenv import load_dotenv


class EnvHelper:
    """
    Environment variable access with .env file support

    Usage:
        EnvHelper.load('/path/to/.env')
        mode = EnvHelper.get('WILLOW_MODE', 'dev')
    """

    _lock = threading.Lock()
    _env_path: Optional[Path] = None
    _loaded: bool = False

    @classmethod
    def load(cls, env_path: Union[str, Path, None] = None, override: bool = False) -> bool:
        """
        Load .env file into environment

        Args:
            env_path: Path to .env file (defaults to .env in the working directory)
            override: Whether to override existing environment variables

        Returns:
            bool: True if a file was found and loaded
        """
        with cls._lock:
            cls._env_path = Path(env_path) if env_path else Path.cwd() / '.env'

            if not cls._env_path.exists():
                return False

            load_dotenv(cls._env_path, override=override)
            cls._loaded = True
            return True

    @classmethod
    def get(cls, key: str, default: Any = None) -> Optional[str]:
        value = os.environ.get(key)
        return default if value is None or value == '' else value

    @classmethod
    def has(cls, key: str) -> bool:
        return cls.get(key) is not None

    @classmethod
    def is_loaded(cls) -> bool:
        return cls._loaded
