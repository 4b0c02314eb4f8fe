"""
Centralized logging configuration.

Console output always; a rotating log file when LOG_FILE is set.
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import config


def setup_logging(
     level: Optional[str] = None,
     log_file: Optional[str] = None,
) -> logging.Logger:
     """
     Configure the root logger for the application.

     Args:
          level: Log level name (defaults to LOG_LEVEL)
          log_file: Path of the rotating log file (defaults to LOG_FILE, None disables it)

     Returns:
          The configured root logger
     """
     log_level = getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO)
     log_file = log_file if log_file is not None else config.LOG_FILE
     formatter = logging.Formatter(config.LOG_FORMAT)

     root_logger = logging.getLogger()
     root_logger.setLevel(log_level)

     # Clear existing handlers
     root_logger.handlers = []

     console_handler = logging.StreamHandler()
     console_handler.setLevel(log_level)
     console_handler.setFormatter(formatter)
     root_logger.addHandler(console_handler)

     if log_file:
          log_path = Path(log_file)
          log_path.parent.mkdir(parents=True, exist_ok=True)
          file_handler = logging.handlers.RotatingFileHandler(
               log_path,
               maxBytes=10 * 1024 * 1024,  # 10MB
               backupCount=5,
          )
          file_handler.setLevel(log_level)
          file_handler.setFormatter(formatter)
          root_logger.addHandler(file_handler)

     # Quieter third-party loggers
     logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
     logging.getLogger("urllib3").setLevel(logging.WARNING)
     if not config.SQL_ECHO:
          logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

     root_logger.info("Logging initialized at %s level", logging.getLevelName(log_level))
     return root_logger
