"""logging.py
Holds configured loggers for rendering, auth, suggestions and tests.
"""
from typing import Dict, Literal, Optional
import logging
import os
import sys
from datetime import datetime
from dotenv import load_dotenv

load_dotenv()  # load .env

ENV = os.getenv("ENV", "development")  # e.g., development, staging, production

LoggerType = Literal["default", "pytest", "render", "auth", "suggestion"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Folder (relative to the base log folder) each logger type writes to locally
LOG_SUBFOLDERS: Dict[str, str] = {
    "default": "",
    "pytest": "tests",
    "render": "render",
    "auth": "auth",
    "suggestion": "suggestions",
}

# CloudWatch log group each logger type ships to in staging/production
CLOUDWATCH_LOG_GROUPS: Dict[str, str] = {
    "default": "resume_builder_logs",
    "render": "resume_builder_render_logs",
    "auth": "resume_builder_auth_logs",
    "suggestion": "resume_builder_suggestion_logs",
}

VERBOSE_LOGGER_TYPES = ("default", "pytest", "render")
FILE_LOGGING_ENVS = ("development", "local", "test")
CLOUD_LOGGING_ENVS = ("staging", "production")


class LoggerFactory:
    """
    Factory to create configured loggers for the different parts of the builder.

    Logging behavior depends on environment (ENV):
      - Console logging is optional.
      - Local file logging in development/local/test, one folder per logger type.
      - Cloud logging (optional) in staging/production using watchtower.
      - A logger is configured once; later requests for the same name reuse it.

    Args:
        env (str): Deployment environment. Defaults to the `ENV` variable.
        base_log_folder (str): Root folder for local log files.
        level (Optional[str]): Level name overriding the per-type default
            (e.g. "WARNING"). Defaults to the `LOG_LEVEL` variable if set.
    """

    def __init__(
        self,
        env: str = ENV,
        base_log_folder: str = "logs",
        level: Optional[str] = None,
    ):
        self.env = env
        self.base_log_folder = base_log_folder
        self.level = level or os.getenv("LOG_LEVEL")

    def get_logger(
        self,
        name: str,
        logger_type: LoggerType = "default",
        console: bool = True
    ) -> logging.Logger:
        """
        Create and return a configured logger based on type.
        """
        logger = logging.getLogger(name)
        if logger.hasHandlers():
            return logger

        logger.propagate = False
        logger.setLevel(self._level_for_type(logger_type))
        formatter = logging.Formatter(LOG_FORMAT)

        if console:
            logger.addHandler(self._stream_handler(formatter))

        if self.env in FILE_LOGGING_ENVS:
            logger.addHandler(self._file_handler(name, logger_type, formatter))
        elif self.env in CLOUD_LOGGING_ENVS:
            self._add_cloudwatch_handler(logger, logger_type, formatter)

        # Never leave a logger without somewhere to write
        if not logger.handlers:
            logger.addHandler(self._stream_handler(formatter))

        return logger

    def _level_for_type(self, logger_type: LoggerType) -> int:
        if self.level:
            return logging.getLevelName(self.level.upper())
        return logging.DEBUG if logger_type in VERBOSE_LOGGER_TYPES else logging.INFO

    @staticmethod
    def _stream_handler(formatter: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        return handler

    def _file_handler(
        self,
        name: str,
        logger_type: LoggerType,
        formatter: logging.Formatter,
    ) -> logging.Handler:
        """Timestamped file handler, e.g. `logs/render/layout_engine_20250101_120000.log`."""
        log_folder = self._get_log_folder_for_type(logger_type)
        os.makedirs(log_folder, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        handler = logging.FileHandler(
            os.path.join(log_folder, f"{name}_{timestamp}.log"),
            mode="a",
            encoding="utf-8",
        )
        handler.setFormatter(formatter)
        return handler

    def _get_log_folder_for_type(self, logger_type: LoggerType) -> str:
        """Return folder path based on logger type. Everything goes to `tests` under pytest."""
        if any("pytest" in arg for arg in sys.argv):
            return os.path.join(self.base_log_folder, LOG_SUBFOLDERS["pytest"])
        return os.path.join(self.base_log_folder, LOG_SUBFOLDERS.get(logger_type, ""))

    def _add_cloudwatch_handler(
        self,
        logger: logging.Logger,
        logger_type: LoggerType,
        formatter: logging.Formatter,
    ):
        """Optional AWS CloudWatch logging for staging/production."""
        try:
            import watchtower
        except ImportError:
            logger.warning("watchtower not installed, skipping cloud logging.")
            return

        aws_handler = watchtower.CloudWatchLogHandler(
            log_group=CLOUDWATCH_LOG_GROUPS.get(logger_type, CLOUDWATCH_LOG_GROUPS["default"])
        )
        aws_handler.setFormatter(formatter)
        logger.addHandler(aws_handler)
