"""Read-only Google Sheets operations on a per-request client."""
from __future__ import annotations

import logging
from typing import Any, List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build
from googleapiclient.errors import Error as ApiClientError
from googleapiclient.errors import HttpError

from .errors import UpstreamError
from .gcp_auth import get_credentials
from .models import ServiceAccountConnection

logger = logging.getLogger(__name__)

# httplib2 transport errors do not subclass OSError.
UPSTREAM_ERRORS = (ApiClientError, GoogleAuthError, httplib2.HttpLib2Error, OSError)

VALUE_RENDER_OPTION = "FORMATTED_VALUE"
DATE_TIME_RENDER_OPTION = "FORMATTED_STRING"


def create_sheets_client(connection: ServiceAccountConnection):
    """Build a Sheets v4 service bound to the caller's service account."""
    creds = get_credentials(connection)
    try:
        svc = build("sheets", "v4", credentials=creds, cache_discovery=False)
    except UPSTREAM_ERRORS as exc:
        raise _upstream_error(exc) from exc
    logger.info("Sheets client created for %s", connection.clientEmail)
    return svc


def _http_error_message(exc: HttpError) -> str:
    # HttpError.reason is the "message" field of Google's JSON error body
    reason = getattr(exc, "reason", None)
    return str(reason) if reason else str(exc)


def _upstream_error(exc: Exception) -> UpstreamError:
    if isinstance(exc, HttpError):
        status = getattr(exc.resp, "status", None)
        try:
            code = int(status) if status is not None else None
        except (TypeError, ValueError):
            code = None
        return UpstreamError(_http_error_message(exc), code)
    return UpstreamError(str(exc))


def _execute(request):
    try:
        return request.execute()
    except UPSTREAM_ERRORS as exc:
        raise _upstream_error(exc) from exc


def sheet_range(sheet_name: str, cell_range: Optional[str] = None) -> str:
    return f"{sheet_name}!{cell_range}" if cell_range else sheet_name


def list_sheet_titles(svc, spreadsheet_id: str) -> List[str]:
    resp = _execute(
        svc.spreadsheets().get(
            spreadsheetId=spreadsheet_id,
            fields="sheets.properties.title",
        )
    )
    sheets = resp.get("sheets") or []
    if not sheets:
        logger.warning("No sheets found in spreadsheet %s", spreadsheet_id)
    return [(sheet.get("properties") or {}).get("title", "") for sheet in sheets]


def _read_values(svc, spreadsheet_id: str, target_range: str) -> List[List[Any]]:
    resp = _execute(
        svc.spreadsheets()
        .values()
        .get(
            spreadsheetId=spreadsheet_id,
            range=target_range,
            valueRenderOption=VALUE_RENDER_OPTION,
            dateTimeRenderOption=DATE_TIME_RENDER_OPTION,
        )
    )
    return resp.get("values") or []


def clean_headers(row: List[Any]) -> List[str]:
    out: List[str] = []
    for cell in row:
        if cell is None:
            continue
        text = str(cell)
        if text.strip():
            out.append(text)
    return out


def read_headers(svc, spreadsheet_id: str, sheet_name: str, cell_range: str) -> List[str]:
    values = _read_values(svc, spreadsheet_id, sheet_range(sheet_name, cell_range))
    first = values[0] if values else []
    return clean_headers(first)


def read_data(svc, spreadsheet_id: str, sheet_name: str, cell_range: Optional[str] = None) -> List[List[Any]]:
    return _read_values(svc, spreadsheet_id, sheet_range(sheet_name, cell_range))


def read_spreadsheet_title(svc, spreadsheet_id: str) -> str:
    resp = _execute(
        svc.spreadsheets().get(
            spreadsheetId=spreadsheet_id,
            fields="properties.title",
        )
    )
    return (resp.get("properties") or {}).get("title") or "Unknown"


__all__ = [
    "create_sheets_client",
    "sheet_range",
    "list_sheet_titles",
    "clean_headers",
    "read_headers",
    "read_data",
    "read_spreadsheet_title",
]
