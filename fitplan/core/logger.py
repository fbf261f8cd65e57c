"""
Structured logging for FitPlan Microservice.

One stdout logger named ``fitplan``; the level comes from ``LOG_LEVEL``
(default INFO). Model output is never logged in full, only its size.
"""
import logging
import os
import sys
from typing import Optional


def setup_logger(name: str = "fitplan", level: Optional[str] = None) -> logging.Logger:
    """
    Create a configured logger instance.

    Args:
        name: Logger name for identification
        level: Level name; falls back to LOG_LEVEL, then INFO

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel((level or os.getenv("LOG_LEVEL") or "INFO").upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(handler)

    return logger


logger = setup_logger()


def log_request(endpoint: str, method: str = "POST") -> None:
    logger.info(f"Request: {method} {endpoint}")


def log_response(endpoint: str, status: str, duration_ms: Optional[float] = None) -> None:
    """Log a response; the duration is appended when measured, even if 0ms."""
    msg = f"Response: {endpoint} -> {status}"
    if duration_ms is not None:
        msg += f" ({duration_ms:.0f}ms)"
    logger.info(msg)


def log_error(context: str, error: Exception, kind: Optional[str] = None) -> None:
    """Log an error with its context and, for classified failures, its kind."""
    tag = f" [{kind}]" if kind else ""
    logger.error(f"Error in {context}{tag}: {type(error).__name__}: {error}")


def log_ai_call(operation: str, model: str, temperature: Optional[float] = None) -> None:
    """Log an outgoing generative model call."""
    suffix = f" (temperature {temperature})" if temperature is not None else ""
    logger.info(f"AI Call: {operation} using {model}{suffix}")
