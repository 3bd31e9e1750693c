import os
from dotenv import load_dotenv

load_dotenv()


def parse_url_rewrites(raw: str) -> list[tuple[str, str]]:
    """Parse URL_REWRITES=prefix1=replacement1,prefix2=replacement2.

    Returned longest prefix first so the most specific rule wins.
    """
    rewrites = []
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        if "=" not in entry:
            raise ValueError(f"Invalid URL_REWRITES entry (expected prefix=replacement): {entry!r}")
        prefix, replacement = entry.split("=", 1)
        prefix = prefix.strip()
        if not prefix:
            raise ValueError("Empty prefix in URL_REWRITES configuration")
        rewrites.append((prefix, replacement.strip()))
    return sorted(rewrites, key=lambda r: len(r[0]), reverse=True)


def _optional_float(name: str, default: float | None = None) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"Invalid {name}: {raw}") from e


HOST = os.getenv("HOST", "0.0.0.0")
try:
    PORT = int(os.getenv("PORT", "3000"))
except ValueError as e:
    raise ValueError(f"Invalid PORT: {os.getenv('PORT')}") from e

SENTRY_DSN = os.getenv("SENTRY_DSN", "")
LOG_FILE_PATH = os.getenv("LOG_FILE_PATH", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# No timeout unless configured; a hung upstream holds the request open.
FETCH_TIMEOUT = _optional_float("FETCH_TIMEOUT")
SHUTDOWN_TIMEOUT = _optional_float("SHUTDOWN_TIMEOUT", 10.0)

URL_REWRITES = parse_url_rewrites(os.getenv("URL_REWRITES", ""))

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",") if os.getenv("ALLOWED_ORIGINS") else ["*"]
