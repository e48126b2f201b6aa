"""Upstream failure type and the user-facing error messages."""
from __future__ import annotations

from typing import Dict, Optional, Union

UNKNOWN_ERROR_CODE = "UNKNOWN_ERROR"

OP_SHEETS = "sheets"
OP_HEADERS = "headers"
OP_DATA = "data"

_FALLBACK_MESSAGES: Dict[str, str] = {
    OP_SHEETS: "Failed to fetch sheets",
    OP_HEADERS: "Failed to fetch headers",
    OP_DATA: "Failed to fetch data",
}

_NOT_FOUND_MESSAGES: Dict[str, str] = {
    OP_SHEETS: "Spreadsheet not found - check the spreadsheet ID",
    OP_HEADERS: "Sheet not found - check the sheet name and spreadsheet ID",
    OP_DATA: "Sheet not found - check the sheet name and spreadsheet ID",
}

# Range errors only make sense where the caller supplied a range.
_RANGE_OPERATIONS = {OP_HEADERS, OP_DATA}


class UpstreamError(Exception):
    """A failure reported by Google (or by google-auth while building the client).

    ``code`` is the upstream HTTP status when one exists, ``None`` otherwise.
    """

    def __init__(self, message: str, code: Optional[int] = None):
        self.message = message or ""
        self.code = code
        super().__init__(self.message)

    @property
    def response_code(self) -> Union[int, str]:
        return self.code if self.code else UNKNOWN_ERROR_CODE


def _permission_message(client_email: Optional[str]) -> str:
    account = f"service account {client_email}" if client_email else "service account"
    return f"Permission denied - ensure {account} has access to the sheet"


def translate_error(
    error: UpstreamError,
    operation: str,
    *,
    client_email: Optional[str] = None,
) -> str:
    """Return the message shown to the caller for ``error`` raised by ``operation``."""
    code = error.code
    if code == 403:
        return _permission_message(client_email)
    if code == 404:
        return _NOT_FOUND_MESSAGES.get(operation, _NOT_FOUND_MESSAGES[OP_SHEETS])
    if code == 400 and operation in _RANGE_OPERATIONS:
        return "Invalid range - check the range format"
    if error.message:
        return error.message
    return _FALLBACK_MESSAGES.get(operation, "Request to Google Sheets failed")


def error_body(error: UpstreamError, operation: str, *, client_email: Optional[str] = None) -> Dict[str, object]:
    return {
        "success": False,
        "error": translate_error(error, operation, client_email=client_email),
        "code": error.response_code,
    }


__all__ = [
    "UNKNOWN_ERROR_CODE",
    "OP_SHEETS",
    "OP_HEADERS",
    "OP_DATA",
    "UpstreamError",
    "translate_error",
    "error_body",
]
