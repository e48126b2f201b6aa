"""Checks what a service account can see in a spreadsheet.

Example:
    python scripts/probe_spreadsheet.py \
        --key service_account_key.json \
        --spreadsheet-id $SPREADSHEET_ID \
        --headers

Runs the same access test and sheet listing as the HTTP endpoints, using a
service account JSON key file instead of a request body.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

# Ensure the repository root is on sys.path when running from arbitrary dirs.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from sheet_gateway.config import settings  # noqa: E402
from sheet_gateway.errors import OP_HEADERS, OP_SHEETS, UpstreamError, translate_error  # noqa: E402
from sheet_gateway.models import ServiceAccountConnection  # noqa: E402
from sheet_gateway.sheets import (  # noqa: E402
    create_sheets_client,
    list_sheet_titles,
    read_headers,
    read_spreadsheet_title,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Probe spreadsheet access with a service account key")
    parser.add_argument("--key", type=Path, required=True, help="Service account JSON key file")
    parser.add_argument("--spreadsheet-id", required=True, help="Spreadsheet ID to inspect")
    parser.add_argument(
        "--headers",
        action="store_true",
        help="Also sample the header row of every sheet",
    )
    parser.add_argument(
        "--headers-range",
        default=settings.default_header_range,
        help=f"Range to sample for headers (default: {settings.default_header_range})",
    )
    return parser.parse_args()


def load_connection(path: Path) -> ServiceAccountConnection:
    data = json.loads(path.read_text(encoding="utf-8"))
    return ServiceAccountConnection(
        name=path.name,
        clientEmail=data.get("client_email"),
        privateKey=data.get("private_key"),
        projectId=data.get("project_id"),
    )


def probe(connection: ServiceAccountConnection, spreadsheet_id: str, headers_range: str | None) -> dict[str, Any]:
    report: dict[str, Any] = {"spreadsheetId": spreadsheet_id, "clientEmail": connection.clientEmail}
    try:
        svc = create_sheets_client(connection)
        report["spreadsheetTitle"] = read_spreadsheet_title(svc, spreadsheet_id)
    except UpstreamError as exc:
        report.update(hasAccess=False, error=exc.message, code=exc.response_code)
        return report
    report["hasAccess"] = True

    try:
        titles = list_sheet_titles(svc, spreadsheet_id)
    except UpstreamError as exc:
        report["error"] = translate_error(exc, OP_SHEETS, client_email=connection.clientEmail)
        return report

    sheets: list[dict[str, Any]] = []
    for title in titles:
        entry: dict[str, Any] = {"title": title}
        if headers_range:
            try:
                entry["headers"] = read_headers(svc, spreadsheet_id, title, headers_range)
            except UpstreamError as exc:
                entry["error"] = translate_error(exc, OP_HEADERS, client_email=connection.clientEmail)
        sheets.append(entry)
    report["sheets"] = sheets
    return report


def main() -> None:
    args = parse_args()
    connection = load_connection(args.key)
    if not connection.is_complete:
        raise SystemExit(f"{args.key} is missing client_email, private_key or project_id")
    report = probe(connection, args.spreadsheet_id, args.headers_range if args.headers else None)
    print(json.dumps(report, ensure_ascii=False, indent=2))
    if not report.get("hasAccess"):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
