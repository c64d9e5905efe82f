"""
Shared top-level error handling for the SBT scripts.

Maps the error taxonomy to exit codes:
    ConfigurationError → 2 (raised before any network call)
    other SBTError     → 1 (funding, exhausted retries, verification)
    anything else      → 1, logged with traceback
"""
import logging
from typing import Callable

from config import Settings, configure_logging, get_settings
from domain.constants import EXIT_CONFIG_ERROR, EXIT_FAILURE
from domain.enums import Operation
from exceptions import ConfigurationError, SBTError
from services.report_service import format_config_error, format_failure_report

logger = logging.getLogger(__name__)


def load_settings() -> Settings:
    """Load settings and configure logging from them (default level if loading fails)."""
    try:
        settings = get_settings()
    except ConfigurationError:
        configure_logging()
        raise
    configure_logging(settings.log_level)
    return settings


def _report_config_error(error: ConfigurationError, operation: Operation) -> int:
    logger.error(f"Configuration error: {error.message}")
    print(format_config_error(error, operation))
    return EXIT_CONFIG_ERROR


def run_operation(operation: Operation, body: Callable[[Settings], int]) -> int:
    """Load settings, run a script body and turn failures into a report plus exit code."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        return _report_config_error(e, operation)

    try:
        return body(settings)
    except ConfigurationError as e:
        return _report_config_error(e, operation)
    except SBTError as e:
        logger.error(f"{operation.value} failed: {e.message}")
        if e.__cause__ is not None:
            logger.debug("Underlying error", exc_info=e.__cause__)
        print(format_failure_report(e, operation, settings))
        return EXIT_FAILURE
    except Exception as e:
        logger.exception(f"Unexpected error during {operation.value}")
        print(format_failure_report(e, operation, settings))
        return EXIT_FAILURE
