"""Shared logging utilities."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl, unquote, urlencode, urlsplit, urlunsplit
from uuid import uuid4

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "proxy.log"

# IPTV panel APIs carry account credentials in the query string
SENSITIVE_PARAMS = ("password", "username", "user", "pass", "token", "key")


def redact_url(url: str) -> str:
    """Mask credential-looking query parameters in a target URL.

    A still-encoded URL (no literal ``?``) is decoded first so its query
    string is found.
    """
    if "?" not in url:
        url = unquote(url)
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if not parts.query:
        return url

    query = []
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        if any(marker in key.lower() for marker in SENSITIVE_PARAMS):
            value = _mask(value)
        query.append((key, value))
    return urlunsplit(parts._replace(query=urlencode(query, safe="*.")))


def write_cli_log(
    level: str,
    message: str,
    *,
    log_file: Path | None = None,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    log_file = log_file or CLI_LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with log_file.open("a") as f:
        f.write(line)


def write_error_log(
    url: str,
    status: int,
    message: str,
    *,
    log_root: Path = LOG_ROOT,
) -> Path:
    """Write a single failed proxy request as a JSON entry."""
    payload = {
        "timestamp": _utc_now(),
        "url": redact_url(url),
        "status": status,
        "error": message,
    }
    return _write_json(log_root / "errors", payload)


def clear_logs(log_root: Path = LOG_ROOT) -> int:
    """Remove logs from a previous run. Returns number of files deleted."""
    if not log_root.exists():
        return 0

    deleted = 0
    for path in log_root.rglob("*"):
        if path.is_file():
            try:
                path.unlink()
                deleted += 1
            except OSError:
                pass
    return deleted


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _mask(value: str) -> str:
    if len(value) <= 10:
        return "***"
    return value[:6] + "..." + value[-4:]


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()
