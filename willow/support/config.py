"""
Config Manager
Access configuration using dot notation
"""

import importlib
import threading
from typing import Any, Dict, Mapping, Optional


class Config:
    """
    Configuration manager with dot notation access

    Usage:
        # Get config value
        mode = Config.get('app.mode', 'dev')
        assets = Config.get('app.assets_path', '/assets')

        # Set runtime value
        Config.set('app.debug', True)

        # Register a dict as a config namespace
        Config.merge('api', {'path': '/api'})

    Config namespaces are either merged dicts or modules in a `config`
    package on the import path:
        config/
        ├── app.py
        └── api.py
    """

    _lock = threading.Lock()
    _loaded: Dict[str, Any] = {}
    _runtime_overrides: Dict[str, Any] = {}

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation (case-insensitive)

        Args:
            key: Config key in dot notation (e.g., 'app.mode', 'api.path')
            default: Default value if key not found, None or empty

        Returns:
            Configuration value or default
        """
        key_lower = key.lower()

        if key_lower in cls._runtime_overrides:
            return cls._runtime_overrides[key_lower]

        parts = key_lower.split('.')
        file_name = parts[0]

        if file_name not in cls._loaded:
            cls._load_config_file(file_name)

        value = cls._loaded.get(file_name)
        for part in parts[1:]:
            value = cls._lookup(value, part)
            if value is None:
                return default

        # empty strings count as unset, like unset .env entries
        if value is None or value == '':
            return default
        return value

    @staticmethod
    def _lookup(container: Any, part: str) -> Any:
        """Case-insensitive attribute or key lookup"""
        if isinstance(container, Mapping):
            for dict_key, item in container.items():
                if str(dict_key).lower() == part:
                    return item
            return None

        if hasattr(container, '__dict__'):
            for attr_name in dir(container):
                if attr_name.lower() == part:
                    return getattr(container, attr_name)
        return None

    @classmethod
    def _load_config_file(cls, file_name: str):
        """
        Load a config module from the config package

        Args:
            file_name: Config module name (without .py extension)
        """
        with cls._lock:
            if file_name in cls._loaded:
                return

            try:
                cls._loaded[file_name] = importlib.import_module(f'config.{file_name}')
            except ImportError:
                # Config file doesn't exist
                cls._loaded[file_name] = None

    @classmethod
    def set(cls, key: str, value: Any):
        """
        Set configuration value at runtime (does not persist to file)

        Example:
            Config.set('app.mode', 'test')
        """
        cls._runtime_overrides[key.lower()] = value

    @classmethod
    def merge(cls, file_name: str, values: Mapping[str, Any]):
        """
        Register a mapping as a config namespace, merged over any dict
        already registered under the same name

        Example:
            Config.merge('app', {'mode': 'prod', 'debug': False})
        """
        file_name = file_name.lower()
        with cls._lock:
            current = cls._loaded.get(file_name)
            merged = dict(current) if isinstance(current, Mapping) else {}
            merged.update(values)
            cls._loaded[file_name] = merged

    @classmethod
    def has(cls, key: str) -> bool:
        """Check if configuration key exists"""
        return cls.get(key) is not None

    @classmethod
    def all(cls, file_name: str) -> Optional[Any]:
        """
        Get a whole config namespace

        Returns:
            Config module, merged dict or None
        """
        file_name = file_name.lower()
        if file_name not in cls._loaded:
            cls._load_config_file(file_name)

        return cls._loaded.get(file_name)

    @classmethod
    def reload(cls, file_name: Optional[str] = None):
        """
        Reload config module(s); merged dicts are dropped

        Args:
            file_name: Specific namespace to reload, or None to reload all
        """
        with cls._lock:
            names = [file_name.lower()] if file_name else list(cls._loaded)
            for name in names:
                cls._loaded.pop(name, None)

        for name in names:
            cls._load_config_file(name)

    @classmethod
    def clear_runtime_overrides(cls):
        """Clear all runtime configuration overrides"""
        cls._runtime_overrides.clear()

    @classmethod
    def clear(cls):
        """Forget every loaded namespace and override"""
        with cls._lock:
            cls._loaded.clear()
        cls._runtime_overrides.clear()
