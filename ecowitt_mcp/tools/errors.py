"""
Ecowitt Error Taxonomy

Every failure the gateway can report is an EcowittError tagged with one
ErrorKind. Upstream numeric codes (envelope codes or HTTP statuses) are
classified here; nothing in this module performs I/O.
"""

from enum import Enum
from typing import Any, Dict, Optional, Union

Code = Union[int, str]


class ErrorKind(str, Enum):
    """Closed set of error kinds surfaced to MCP clients"""

    CONFIGURATION = "configuration_error"
    PARAMETER = "parameter_error"
    DEVICE = "device_error"
    AUTHENTICATION = "authentication_error"
    SERVER_BUSY = "server_busy_error"
    CLIENT = "client_error"
    SERVER = "server_error"
    NETWORK = "network_error"
    TIMEOUT = "timeout_error"
    DATA_PARSING = "data_parsing_error"
    HANDLER = "handler_error"
    UNKNOWN = "unknown_error"


# Upstream code -> (kind, canonical message)
API_ERROR_CODES: Dict[int, tuple] = {
    -1: (ErrorKind.SERVER_BUSY, "System is busy."),
    40000: (ErrorKind.PARAMETER, "Illegal parameter"),
    40010: (ErrorKind.AUTHENTICATION, "Illegal Application_Key Parameter"),
    40011: (ErrorKind.AUTHENTICATION, "Illegal Api_Key Parameter"),
    40012: (ErrorKind.DEVICE, "Illegal MAC/IMEI Parameter"),
    40013: (ErrorKind.PARAMETER, "Illegal start_date Parameter"),
    40014: (ErrorKind.PARAMETER, "Illegal end_date Parameter"),
    40015: (ErrorKind.PARAMETER, "Illegal cycle_type Parameter"),
    40016: (ErrorKind.PARAMETER, "Illegal call_back Parameter"),
    40017: (ErrorKind.PARAMETER, "Missing Application_Key Parameter"),
    40018: (ErrorKind.PARAMETER, "Missing Api_Key Parameter"),
    40019: (ErrorKind.DEVICE, "Missing MAC Parameter"),
    40020: (ErrorKind.PARAMETER, "Missing start_date Parameter"),
    40021: (ErrorKind.PARAMETER, "Missing end_date Parameter"),
}

DEFAULT_API_MESSAGE = "An unknown Ecowitt API error occurred."

# JSON-RPC error codes used when a failure has to leave as a protocol error
# (resource reads). Must cover every ErrorKind.
JSONRPC_ERROR_CODES: Dict[ErrorKind, int] = {
    ErrorKind.CONFIGURATION: -32603,
    ErrorKind.PARAMETER: -32602,
    ErrorKind.DEVICE: -32002,
    ErrorKind.AUTHENTICATION: -32001,
    ErrorKind.SERVER_BUSY: -32003,
    ErrorKind.CLIENT: -32004,
    ErrorKind.SERVER: -32005,
    ErrorKind.NETWORK: -32006,
    ErrorKind.TIMEOUT: -32007,
    ErrorKind.DATA_PARSING: -32008,
    ErrorKind.HANDLER: -32603,
    ErrorKind.UNKNOWN: -32000,
}


def _is_number(code: Any) -> bool:
    return isinstance(code, (int, float)) and not isinstance(code, bool)


def classify_code(code: Code) -> ErrorKind:
    """Map an upstream code or HTTP status to an ErrorKind (first match wins)."""
    if _is_number(code) and code in API_ERROR_CODES:
        return API_ERROR_CODES[code][0]
    if _is_number(code) and 400 <= code < 500:
        return ErrorKind.CLIENT
    if _is_number(code) and 500 <= code < 600:
        return ErrorKind.SERVER
    return ErrorKind.UNKNOWN


def is_retryable(code: Code) -> bool:
    """Server busy, any 5xx and HTTP 429 are worth retrying."""
    if not _is_number(code):
        return False
    return code == -1 or 500 <= code < 600 or code == 429


class EcowittError(Exception):
    """A classified failure: stable (code, message, kind, retryable) tuple."""

    def __init__(
        self,
        message: str,
        code: Code,
        kind: ErrorKind,
        retryable: bool = False,
        original_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = ErrorKind(kind)
        self.retryable = retryable
        self.original_message = original_message

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "kind": self.kind.value,
            "retryable": self.retryable,
        }
        if self.original_message is not None:
            data["originalErrorMessage"] = self.original_message
        return data

    def __repr__(self) -> str:
        return f"EcowittError(kind={self.kind.value!r}, code={self.code!r}, message={self.message!r})"


def api_error(code: Code, message: Optional[str] = None, original_message: Optional[str] = None) -> EcowittError:
    """Build a classified error from an envelope code or an HTTP status.

    The upstream message wins; the canonical table message is the fallback.
    """
    canonical = API_ERROR_CODES.get(code, (None, None))[1] if _is_number(code) else None
    return EcowittError(
        message or canonical or DEFAULT_API_MESSAGE,
        code,
        classify_code(code),
        retryable=is_retryable(code),
        original_message=original_message if original_message is not None else message,
    )


def configuration_error(message: str, code: str = "MISSING_CONFIG") -> EcowittError:
    return EcowittError(message, code, ErrorKind.CONFIGURATION)


def parameter_error(message: str) -> EcowittError:
    return EcowittError(message, "INVALID_PARAMETER", ErrorKind.PARAMETER)


def device_not_found(identifier: str) -> EcowittError:
    error = EcowittError(f'Device "{identifier}" not found.', "DEVICE_NOT_FOUND", ErrorKind.DEVICE)
    error.identifier = identifier
    return error


def ambiguous_device_name(name: str, count: int) -> EcowittError:
    error = EcowittError(
        f'Device name "{name}" matches {count} devices; address the device by MAC or IMEI.',
        "AMBIGUOUS_DEVICE_NAME",
        ErrorKind.DEVICE,
    )
    error.identifier = name
    return error


def network_error(message: str) -> EcowittError:
    return EcowittError(f"Network error: {message}", "NETWORK_ERROR", ErrorKind.NETWORK, retryable=True, original_message=message)


def timeout_error() -> EcowittError:
    return EcowittError("Request timed out.", "TIMEOUT_ERROR", ErrorKind.TIMEOUT, retryable=True)


def data_parsing_error(message: str) -> EcowittError:
    return EcowittError(
        f"Failed to parse API response as JSON: {message}",
        "DATA_PARSING_ERROR",
        ErrorKind.DATA_PARSING,
        original_message=message,
    )


def handler_error(operation: str, exc: BaseException) -> EcowittError:
    return EcowittError(
        f"An unexpected error occurred in {operation}: {exc}",
        "HANDLER_ERROR",
        ErrorKind.HANDLER,
        original_message=str(exc),
    )


def to_error_envelope(error: BaseException) -> Dict[str, Any]:
    """Serialize any exception into the gateway's error envelope."""
    if isinstance(error, EcowittError):
        return {"error": error.to_dict()}
    return {
        "error": {
            "code": "UNHANDLED_EXCEPTION",
            "message": f"An unhandled exception occurred: {error}",
            "kind": ErrorKind.HANDLER.value,
            "retryable": False,
        }
    }
