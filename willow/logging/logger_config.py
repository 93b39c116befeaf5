"""
Logging Configuration
Provides structured logging with rotation
"""
import json
import logging
import logging.handlers
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRIBUTES = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
    'levelno', 'lineno', 'module', 'msecs', 'pathname', 'process',
    'processName', 'relativeCreated', 'thread', 'threadName', 'exc_info',
    'exc_text', 'stack_info', 'message', 'taskName',
}


class JSONFormatter(logging.Formatter):
    """One JSON object per line; `extra` fields are copied in as keys"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'location': f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES
        )
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class LoggerConfig:
    """
    Centralized logging configuration
    """
    TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    @staticmethod
    def setup_logger(
        name: str,
        format_type: str = 'text',
        log_dir: Union[str, Path, None] = None,
        file_name: Optional[str] = None,
        max_bytes: Optional[int] = None,
        backup_count: Optional[int] = None,
        level: Optional[int] = None,
        console: Optional[bool] = None,
    ) -> logging.Logger:
        """
        Setup a logger with a rotating file handler

        Args:
            name: Logger name
            format_type: Format type ('json' or 'text')
            log_dir: Directory for log files (default: app.log_dir or 'logs')
            file_name: Log file name without extension (default: logger name)
            max_bytes: Max bytes before rotation (default: 10MB)
            backup_count: Number of backup files to keep
            level: Log level (default: derived from the application mode)
            console: Also log to stderr (default: app.debug)

        Returns:
            Configured logger

        Example:
            logger = LoggerConfig.setup_logger('willow', format_type='json')
        """
        from willow.defaults import (
            DEFAULT_LOG_BACKUP_COUNT,
            DEFAULT_LOG_DIR,
            DEFAULT_LOG_MAX_BYTES,
        )
        from willow.support import Config, Mode

        if max_bytes is None:
            max_bytes = Config.get('app.log_max_bytes', DEFAULT_LOG_MAX_BYTES)
        if backup_count is None:
            backup_count = Config.get('app.log_backup_count', DEFAULT_LOG_BACKUP_COUNT)
        if level is None:
            level = LoggerConfig.get_level_by_mode(Mode.get())
        if console is None:
            console = bool(Config.get('app.debug', False))

        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Clear existing handlers
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        log_dir = Path(log_dir or Config.get('app.log_dir', DEFAULT_LOG_DIR))
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"{file_name or name}.log"

        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )

        if format_type == 'json':
            formatter = JSONFormatter()
        else:
            formatter = logging.Formatter(LoggerConfig.TEXT_FORMAT)

        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if console:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        # Prevent propagation to avoid duplicate logs
        logger.propagate = False

        return logger

    @staticmethod
    def get_level_by_mode(mode: str) -> int:
        """
        Get logging level based on application mode

        Args:
            mode: Mode name ('prod', 'stage', 'dev', 'test')

        Returns:
            Logging level
        """
        levels = {
            'prod': logging.WARNING,
            'stage': logging.INFO,
            'dev': logging.DEBUG,
            'test': logging.ERROR,
        }
        return levels.get(mode.lower(), logging.INFO)
