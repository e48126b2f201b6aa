from __future__ import annotations

import logging
from typing import Any, Dict, Sequence

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account

from .config import settings
from .errors import UpstreamError
from .models import ServiceAccountConnection

logger = logging.getLogger(__name__)

READONLY_SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/drive.readonly",
]


def normalize_private_key(private_key: str) -> str:
    """Turn literal ``\\n`` pairs (keys pasted through JSON) into real newlines."""
    return private_key.replace("\\n", "\n")


def service_account_info(connection: ServiceAccountConnection) -> Dict[str, Any]:
    return {
        "type": "service_account",
        "client_email": connection.clientEmail,
        "private_key": normalize_private_key(connection.privateKey or ""),
        "project_id": connection.projectId,
        "token_uri": settings.google_token_uri,
    }


def get_credentials(connection: ServiceAccountConnection, scopes: Sequence[str] = READONLY_SCOPES):
    """Return google-auth service account Credentials for the caller's key.

    Credentials are built per request and never cached: every caller brings
    its own key. A malformed email/key pair is raised as ``UpstreamError``.
    """
    logger.info("Creating service account credentials for %s", connection.clientEmail)
    try:
        return service_account.Credentials.from_service_account_info(
            service_account_info(connection),
            scopes=list(scopes),
        )
    except (ValueError, GoogleAuthError) as exc:
        logger.error("Invalid service account credentials for %s: %s", connection.clientEmail, exc)
        raise UpstreamError(str(exc)) from exc
