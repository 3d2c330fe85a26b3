"""
VAULTPREP Logging System

This module provides centralized logging for VaultPrep.
Records go to the console and, when configured, to a log file.
"""

import logging
import sys
from typing import Optional

from .config import Config


class Logger:
    """Centralized logging system for VaultPrep."""

    def __init__(self, name: str = "vaultprep", level: str = "INFO", config: Optional[Config] = None):
        """Initialize logger.

        Args:
            name: Logger name, nested under the ``vaultprep`` namespace
            level: Fallback log level when the config does not set one
            config: Optional Config instance (defaults to ``config.json``)
        """
        self.name = name if name.startswith("vaultprep") else f"vaultprep.{name}"
        self.config = config or Config()

        config_level = self.config.get('logging.level', level) or level
        self.level = getattr(logging, str(config_level).upper(), logging.INFO)

        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Set up logger with console and optional file handlers."""
        logger = logging.getLogger(self.name)
        logger.setLevel(self.level)

        # Replace handlers from an earlier setup of the same name
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.level)
        console_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

        log_file = self.config.get('logging.file')
        if log_file:
            try:
                file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
                file_handler.setLevel(self.level)
                file_handler.setFormatter(logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
                ))
                logger.addHandler(file_handler)
            except OSError as e:
                print(f"Warning: Could not open log file {log_file}: {e}", file=sys.stderr)

        return logger

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        self.logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self.logger.warning(message, extra=kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        self.logger.error(message, extra=kwargs)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        self.logger.debug(message, extra=kwargs)

    def log_export_start(self, relation: str, table_count: int) -> None:
        """Log the start of one relation export."""
        self.info(f"Compiling {relation} from {table_count} tables", relation=relation, table_count=table_count)

    def log_export_complete(self, relation: str, row_count: int) -> None:
        """Log the completion of one relation export."""
        self.info(f"Compiled {relation}: {row_count} rows", relation=relation, row_count=row_count)

    def log_omission(self, relation: str, table: str, group: str, reason: str) -> None:
        """Log an annotation that was left out of a relation."""
        where = f"{table}.{group}" if group else table
        self.warning(
            f"Omitted from {relation}: {where} ({reason})",
            relation=relation, table=table, group=group, reason=reason,
        )
