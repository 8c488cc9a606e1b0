###########EXTERNAL IMPORTS############

from typing import Optional
import os
from fastapi.datastructures import QueryParams

#######################################

#############LOCAL IMPORTS#############

#######################################


def require_env_variable(key: str) -> str:
    """
    Returns the value of the environment variable for the given key.
    Raises:
        KeyError: If the key is not found
    """

    value = os.getenv(key)
    if value is None:
        raise KeyError(f"Key {key} was not found in the environment")

    return value


def check_bool_str(string: Optional[str]) -> bool:
    """
    Convert string to boolean, case-insensitive check for "TRUE".

    Args:
        string: String to convert, or None.

    Returns:
        bool: True if string equals "TRUE" (case-insensitive), False otherwise.
    """

    if string is not None:
        return string.upper() == "TRUE"
    return False


def require_int_param(params: QueryParams, key: str) -> int:
    """
    Returns a required integer query parameter.

    Args:
        params: Query parameters of the request.
        key: Name of the parameter.

    Raises:
        KeyError: If the parameter is missing.
        ValueError: If the parameter is not an integer.
    """

    value = params.get(key)
    if value is None:
        raise KeyError(f"Query parameter {key} is missing")

    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Query parameter {key} must be an integer, got {value}")
