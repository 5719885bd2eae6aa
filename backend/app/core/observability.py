"""
Observability helpers.

Adds correlation IDs and structured logging context to core operations.
"""

import time
import uuid
import logging
from functools import wraps
from typing import Callable, Optional

from backend.app.core.config import settings
from backend.app.core.exceptions import AppException

# Configure structured logger
logger = logging.getLogger("transport_ledger")
logger.setLevel(settings.log_level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Child logger under the package logger."""
    if not name:
        return logger
    return logger.getChild(name)


def observed(operation: str):
    """
    Decorator that logs the outcome and duration of a core operation.

    Usage:
        @observed("lr_search")
        def search(...):
            ...
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            # 1. Correlation ID
            correlation_id = str(uuid.uuid4())

            # 2. Start Timer
            start_time = time.perf_counter()

            log_data = {
                "correlation_id": correlation_id,
                "operation": operation,
            }

            # 3. Run operation
            try:
                result = func(*args, **kwargs)
            except AppException as exc:
                log_data["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
                log_data["error_code"] = exc.error_code
                logger.warning("Operation Rejected", extra=log_data)
                raise
            except Exception as exc:
                log_data["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
                log_data["error"] = f"{type(exc).__name__}: {exc}"
                logger.error("Operation Failed", extra=log_data)
                raise

            # 4. Structured Log
            log_data["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
            logger.info("Operation Completed", extra=log_data)
            return result
        return wrapper
    return decorator
