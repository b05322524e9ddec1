# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sso

import inspect
import logging
import sys
from typing import Any

from loguru import logger
from opentelemetry import trace
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["logger", "configure_logging"]

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class LogSettings(BaseSettings):
    """COREASON_SSO_LOG_LEVEL and COREASON_SSO_LOG_JSON."""

    model_config = SettingsConfigDict(env_prefix="COREASON_SSO_", extra="ignore")

    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def known_level(cls, v: Any) -> str:
        level = str(v).upper()
        try:
            logger.level(level)
        except ValueError:
            return "INFO"
        return level

    @field_validator("log_json", mode="before")
    @classmethod
    def only_true_enables_json(cls, v: Any) -> bool:
        return str(v).lower() == "true"


class InterceptHandler(logging.Handler):
    """Forwards stdlib records (httpx, httpcore) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the original caller
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def trace_id_injector(record: dict[str, Any]) -> None:
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        record["extra"]["trace_id"] = format(ctx.trace_id, "032x")
        record["extra"]["span_id"] = format(ctx.span_id, "016x")


def configure_logging() -> None:
    """
    (Re)configures loguru from the environment: JSON on stdout when
    COREASON_SSO_LOG_JSON is true, otherwise a console format on stderr.
    """
    settings = LogSettings()

    logger.configure(handlers=[], patcher=trace_id_injector)  # type: ignore[arg-type]
    if settings.log_json:
        logger.add(sys.stdout, level=settings.log_level, serialize=True)
    else:
        logger.add(sys.stderr, level=settings.log_level, format=CONSOLE_FORMAT)

    logging.basicConfig(handlers=[InterceptHandler()], level=logger.level(settings.log_level).no, force=True)


# Initialize on import
configure_logging()
