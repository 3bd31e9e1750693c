import logging
import uuid
import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from config import ALLOWED_ORIGINS, HOST, LOG_FILE_PATH, LOG_LEVEL, PORT, SENTRY_DSN, SHUTDOWN_TIMEOUT, URL_REWRITES
from routers import lightning_address, public
import services.fetcher as fetcher_svc

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
if LOG_FILE_PATH:
    file_handler = logging.FileHandler(LOG_FILE_PATH)
    file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logging.getLogger().addHandler(file_handler)

logger = logging.getLogger(__name__)

SENTRY_IGNORED_ERRORS = ("401",)


def drop_ignored_errors(event: dict, hint: dict) -> dict | None:
    """Sentry before_send hook: discard events whose error mentions an ignored code."""
    exc_info = hint.get("exc_info")
    text = str(exc_info[1]) if exc_info else (event.get("logentry") or {}).get("message") or ""
    if any(ignored in text for ignored in SENTRY_IGNORED_ERRORS):
        return None
    return event


if SENTRY_DSN:
    sentry_sdk.init(dsn=SENTRY_DSN, before_send=drop_ignored_errors)
    logger.info("Sentry error tracking enabled")

app = FastAPI(title="Lightning Address Details")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["*"],
)


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response


app.add_middleware(RequestIDMiddleware)

app.include_router(public.router)
app.include_router(lightning_address.router)


@app.on_event("startup")
async def startup() -> None:
    fetcher_svc.http_client = fetcher_svc.build_client()
    for prefix, replacement in URL_REWRITES:
        logger.info(f"Rewriting outbound URLs {prefix} -> {replacement}")


@app.on_event("shutdown")
async def shutdown() -> None:
    if fetcher_svc.http_client:
        await fetcher_svc.http_client.aclose()
        fetcher_svc.http_client = None
    sentry_sdk.flush(timeout=2)


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting lightning address details server on {HOST}:{PORT}")

    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        log_level=LOG_LEVEL.lower(),
        timeout_graceful_shutdown=SHUTDOWN_TIMEOUT,
    )

    logger.info("Server stopped gracefully")
