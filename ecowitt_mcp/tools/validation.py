"""
Required-parameter checks shared by the device handlers.
"""

from .errors import parameter_error


def validate_required(name: str, value, context: str = "parameter") -> str:
    """Return value unchanged, or raise parameter_error naming the field."""
    if value is None:
        raise parameter_error(f"Missing required {context}: {name}")
    if not isinstance(value, str):
        raise parameter_error(f"The {context} '{name}' must be a string.")
    if not value.strip():
        raise parameter_error(f"The {context} '{name}' cannot be empty.")
    return value
