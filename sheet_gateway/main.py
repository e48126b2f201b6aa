import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .config import settings
from .models import HealthResponse
from .routers.api import router as api_router

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /health",
    "POST /api/fetchSheets",
    "POST /api/fetchHeaders",
    "POST /api/fetchData",
    "POST /api/testAccess",
]


def _too_large() -> JSONResponse:
    return JSONResponse(status_code=413, content={"success": False, "error": "Request body too large"})


class BodySizeLimitMiddleware:
    """Reject request bodies above ``settings.max_body_bytes`` with a 413.

    Declared lengths are checked up front. Bodies sent without a length
    (chunked) are buffered while counting, then replayed to the app.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = settings.max_body_bytes
        length = Headers(scope=scope).get("content-length")
        if length and length.isdigit() and int(length) > limit:
            await _too_large()(scope, receive, send)
            return

        body = bytearray()
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] != "http.request":
                # client went away before the body was complete
                return
            body.extend(message.get("body", b""))
            if len(body) > limit:
                await _too_large()(scope, receive, send)
                return
            more_body = message.get("more_body", False)

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": bytes(body), "more_body": False}
            return await receive()

        await self.app(scope, replay, send)


class UnhandledErrorMiddleware:
    """Turn unexpected exceptions into the JSON 500 body.

    Runs inside CORSMiddleware so browsers on allowed origins can read it.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = False

        async def tracking_send(message: Message) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await self.app(scope, receive, tracking_send)
        except Exception as exc:
            if started:
                raise
            logger.exception("Unhandled error on %s %s", scope.get("method"), scope.get("path"))
            response = JSONResponse(
                status_code=500,
                content={"success": False, "error": "Internal server error", "message": str(exc)},
            )
            await response(scope, receive, send)


app = FastAPI(title="Sheet Gateway API", version="0.1.0")
app.add_middleware(UnhandledErrorMiddleware)
app.add_middleware(BodySizeLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health():
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return HealthResponse(message=settings.service_message, timestamp=now)


app.include_router(api_router, prefix="/api", tags=["sheets"])


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and wrong methods both answer with the endpoint list.
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "error": "Endpoint not found",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Invalid request body",
            # "input" would echo the caller's private key back
            "details": jsonable_encoder(
                [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
            ),
        },
    )


def serve() -> None:
    import uvicorn

    logger.info("Sheet Gateway starting on http://%s:%d", settings.host, settings.port)
    for endpoint in AVAILABLE_ENDPOINTS:
        logger.info("  %s", endpoint)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
