###########EXTERNAL IMPORTS############

import os
from dotenv import load_dotenv

#######################################

#############LOCAL IMPORTS#############

from model.cursor import CursorConfig, ServiceConfig, TrimMode
from controller.exceptions import CursorConfigError
import util.functions.objects as objects

#######################################

CURSOR_REQUIRED = ["CURSOR_UNIT_SIZE"]


def check_config_valid(config_file: str) -> None:
    """
    Loads the environment and validates required cursor settings.

    Args:
        config_file (str): Path to the .env config file.

    Raises:
        ValueError: If any required setting is missing.
    """

    load_dotenv(config_file)
    missing = [var for var in CURSOR_REQUIRED if os.getenv(var) is None]
    if missing:
        raise ValueError(f"Missing required cursor config(s): {', '.join(missing)}")


def load_cursor_config(config_file: str) -> CursorConfig:
    """
    Builds the cursor configuration from a .env file.

    Recognized keys:
        CURSOR_UNIT_SIZE (required), CURSOR_RETENTION_UNITS (default 2),
        CURSOR_TRIM_MODE (directional | centered, default directional),
        CURSOR_RESET_OPPOSITE_BOUNDARY (default TRUE).

    Raises:
        ValueError: If a required setting is missing.
        CursorConfigError: If a setting has an invalid value.
    """

    check_config_valid(config_file)

    try:
        unit_size = int(objects.require_env_variable("CURSOR_UNIT_SIZE"))
        retention_units = int(os.getenv("CURSOR_RETENTION_UNITS", "2"))
        trim_mode = TrimMode(os.getenv("CURSOR_TRIM_MODE", TrimMode.DIRECTIONAL.value).lower())
    except ValueError as e:
        raise CursorConfigError(f"Invalid cursor configuration in {config_file}: {e}") from e

    reset_opposite = os.getenv("CURSOR_RESET_OPPOSITE_BOUNDARY")
    return CursorConfig(
        unit_size=unit_size,
        retention_units=retention_units,
        trim_mode=trim_mode,
        reset_opposite_boundary=objects.check_bool_str(reset_opposite) if reset_opposite is not None else True,
    )


def load_service_config(config_file: str) -> ServiceConfig:
    """
    Builds the HTTP service configuration from a .env file.

    Every key is optional: HTTP_HOST, HTTP_PORT, LOG_LEVEL, MOCK_LOG_COUNT.

    Raises:
        CursorConfigError: If a numeric setting cannot be parsed.
    """

    load_dotenv(config_file)
    defaults = ServiceConfig()

    try:
        return ServiceConfig(
            host=os.getenv("HTTP_HOST", defaults.host),
            port=int(os.getenv("HTTP_PORT", str(defaults.port))),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
            mock_log_count=int(os.getenv("MOCK_LOG_COUNT", str(defaults.mock_log_count))),
        )
    except ValueError as e:
        raise CursorConfigError(f"Invalid service configuration in {config_file}: {e}") from e
