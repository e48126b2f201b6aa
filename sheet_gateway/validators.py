"""Request checks that run before any Google call."""
from __future__ import annotations

from fastapi import HTTPException

from .models import ServiceAccountConnection, SheetRequest, SpreadsheetRequest

CREDENTIALS_REQUIRED = "Service account credentials are required (clientEmail, privateKey, projectId)"


def _require_connection(connection: ServiceAccountConnection | None) -> ServiceAccountConnection:
    if connection is None or not connection.is_complete:
        raise HTTPException(status_code=400, detail=CREDENTIALS_REQUIRED)
    return connection


def validate_spreadsheet_request(payload: SpreadsheetRequest) -> ServiceAccountConnection:
    if not payload.spreadsheetId:
        raise HTTPException(status_code=400, detail="spreadsheetId is required")
    return _require_connection(payload.connection)


def validate_sheet_request(payload: SheetRequest) -> ServiceAccountConnection:
    if not payload.spreadsheetId or not payload.sheetName:
        raise HTTPException(status_code=400, detail="spreadsheetId and sheetName are required")
    return _require_connection(payload.connection)
