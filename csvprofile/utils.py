"""
Utility Functions Module

Provides essential utilities:
- Report documents (YAML / JSON)
- Tabular summary output (CSV, JSON, Parquet)
- Logging configuration
"""

import sys
import json
import yaml
import logging
from pathlib import Path
from typing import Dict, Optional, Any, Union
from datetime import datetime
import pandas as pd
from logging.handlers import RotatingFileHandler

from .errors import ProfilerError

logger = logging.getLogger(__name__)

ROOT_LOGGER_NAME = "csvprofile"


class FileHandler:
    """
    Handles file input/output operations

    Supports: YAML and JSON documents, CSV / JSON / Parquet tables
    """

    @staticmethod
    def write_table(
        data: pd.DataFrame,
        filepath: Union[str, Path],
        **kwargs
    ):
        """
        Write a DataFrame based on extension

        Args:
            data: DataFrame to write
            filepath: Output path
            **kwargs: Additional arguments for pandas writers
        """
        filepath = Path(filepath)

        # Create directory if needed
        filepath.parent.mkdir(parents=True, exist_ok=True)

        extension = filepath.suffix.lower()

        try:
            if extension == '.csv':
                data.to_csv(filepath, index=False, **kwargs)
            elif extension == '.json':
                data.to_json(filepath, orient='records', indent=2, **kwargs)
            elif extension == '.parquet':
                data.to_parquet(filepath, index=False, **kwargs)
            else:
                raise ProfilerError(f"Unsupported table format: {extension}")

            logger.info(f"Table written successfully: {filepath}")

        except OSError as e:
            logger.error(f"Failed to write {filepath}: {e}")
            raise ProfilerError(f"Failed to write {filepath}: {e}") from e

    @staticmethod
    def write_document(
        document: Any,
        filepath: Union[str, Path],
        indent: int = 2
    ):
        """
        Write a JSON-compatible document as YAML or JSON by extension

        Args:
            document: Dictionary or list to write
            filepath: Output path
            indent: JSON indentation
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        extension = filepath.suffix.lower()
        if extension not in ['.yaml', '.yml', '.json']:
            raise ProfilerError(f"Unsupported document format: {extension}")

        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                if extension in ['.yaml', '.yml']:
                    yaml.safe_dump(document, f, default_flow_style=False, sort_keys=False)
                else:
                    json.dump(document, f, indent=indent)

            logger.info(f"Document written successfully: {filepath}")

        except OSError as e:
            logger.error(f"Failed to write {filepath}: {e}")
            raise ProfilerError(f"Failed to write {filepath}: {e}") from e

    @staticmethod
    def get_file_info(filepath: Union[str, Path]) -> Dict[str, Any]:
        """
        Get file information

        Args:
            filepath: Path to file

        Returns:
            Dictionary with file info
        """
        filepath = Path(filepath)

        if not filepath.exists():
            return {'exists': False}

        stat = filepath.stat()

        return {
            'exists': True,
            'size_bytes': stat.st_size,
            'size_mb': stat.st_size / (1024 * 1024),
            'modified': datetime.fromtimestamp(stat.st_mtime).isoformat(),
            'extension': filepath.suffix,
            'name': filepath.name,
        }


class LoggerConfig:
    """
    Logging configuration manager

    Sets up consistent logging across the application
    """

    @staticmethod
    def setup_logger(
        name: str = ROOT_LOGGER_NAME,
        level: int = logging.INFO,
        log_file: Optional[Union[str, Path]] = None,
        log_to_console: bool = True,
        log_format: Optional[str] = None
    ) -> logging.Logger:
        """
        Setup and configure logger

        Args:
            name: Logger name
            level: Logging level
            log_file: Optional file path for file logging
            log_to_console: Whether to log to console
            log_format: Custom log format

        Returns:
            Configured logger
        """
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Remove existing handlers
        logger.handlers.clear()

        if log_format is None:
            log_format = (
                '%(asctime)s - %(name)s - %(levelname)s - '
                '%(filename)s:%(lineno)d - %(message)s'
            )

        formatter = logging.Formatter(log_format)

        if log_to_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        return logger


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Quick logging setup

    Args:
        level: Logging level (number or name)
        log_file: Optional log file path
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    return LoggerConfig.setup_logger(level=level, log_file=log_file)


def write_table(data: pd.DataFrame, filepath: Union[str, Path], **kwargs):
    """Quick table writing"""
    FileHandler.write_table(data, filepath, **kwargs)
