import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..config import settings
from ..errors import OP_DATA, OP_HEADERS, OP_SHEETS, UpstreamError, error_body
from ..models import (
    AccessResponse,
    DataResponse,
    ErrorResponse,
    HeadersResponse,
    SheetNamesResponse,
    SheetRequest,
    SpreadsheetRequest,
)
from ..sheets import (
    create_sheets_client,
    list_sheet_titles,
    read_data,
    read_headers,
    read_spreadsheet_title,
)
from ..validators import validate_sheet_request, validate_spreadsheet_request

logger = logging.getLogger(__name__)

router = APIRouter()

_ERRORS = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def _failure(exc: UpstreamError, operation: str, client_email: str) -> JSONResponse:
    body = error_body(exc, operation, client_email=client_email)
    logger.error("Error fetching %s: %s (code=%s)", operation, exc.message, body["code"])
    return JSONResponse(status_code=500, content=body)


@router.post("/fetchSheets", response_model=SheetNamesResponse, responses=_ERRORS)
def fetch_sheets(payload: SpreadsheetRequest):
    connection = validate_spreadsheet_request(payload)
    logger.info(
        "Fetching sheets for spreadsheet %s (connection=%s)",
        payload.spreadsheetId,
        connection.name,
    )
    try:
        svc = create_sheets_client(connection)
        names = list_sheet_titles(svc, payload.spreadsheetId)
    except UpstreamError as exc:
        return _failure(exc, OP_SHEETS, connection.clientEmail)
    logger.info("Fetched %d sheet names from %s", len(names), payload.spreadsheetId)
    return SheetNamesResponse(sheetNames=names, count=len(names), spreadsheetId=payload.spreadsheetId)


@router.post("/fetchHeaders", response_model=HeadersResponse, responses=_ERRORS)
def fetch_headers(payload: SheetRequest):
    connection = validate_sheet_request(payload)
    cell_range = payload.range or settings.default_header_range
    logger.info(
        "Fetching headers for %s!%s in spreadsheet %s",
        payload.sheetName,
        cell_range,
        payload.spreadsheetId,
    )
    try:
        svc = create_sheets_client(connection)
        headers = read_headers(svc, payload.spreadsheetId, payload.sheetName, cell_range)
    except UpstreamError as exc:
        return _failure(exc, OP_HEADERS, connection.clientEmail)
    logger.info("Fetched %d headers from %s", len(headers), payload.sheetName)
    return HeadersResponse(
        headers=headers,
        count=len(headers),
        sheetName=payload.sheetName,
        spreadsheetId=payload.spreadsheetId,
    )


@router.post("/fetchData", response_model=DataResponse, responses=_ERRORS)
def fetch_data(payload: SheetRequest):
    connection = validate_sheet_request(payload)
    logger.info(
        "Fetching data for %s (range=%s) in spreadsheet %s",
        payload.sheetName,
        payload.range or "full sheet",
        payload.spreadsheetId,
    )
    try:
        svc = create_sheets_client(connection)
        rows = read_data(svc, payload.spreadsheetId, payload.sheetName, payload.range)
    except UpstreamError as exc:
        return _failure(exc, OP_DATA, connection.clientEmail)
    logger.info("Fetched %d rows from %s", len(rows), payload.sheetName)
    return DataResponse(
        data=rows,
        rowCount=len(rows),
        sheetName=payload.sheetName,
        spreadsheetId=payload.spreadsheetId,
    )


@router.post(
    "/testAccess",
    response_model=AccessResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
)
def test_access(payload: SpreadsheetRequest):
    connection = validate_spreadsheet_request(payload)
    logger.info("Testing access to spreadsheet %s", payload.spreadsheetId)
    # Denied access is an expected answer here, so every failure is a 200.
    try:
        svc = create_sheets_client(connection)
        title = read_spreadsheet_title(svc, payload.spreadsheetId)
    except Exception as exc:
        error = exc if isinstance(exc, UpstreamError) else UpstreamError(str(exc))
        logger.warning("Access test failed for %s: %s", payload.spreadsheetId, error.message)
        return AccessResponse(
            hasAccess=False,
            spreadsheetId=payload.spreadsheetId,
            error=error.message or "Access test failed",
            code=error.response_code,
        )
    logger.info("Access test successful: %s", title)
    return AccessResponse(hasAccess=True, spreadsheetTitle=title, spreadsheetId=payload.spreadsheetId)
