from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_LIMIT = 5


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection settings for the remote record service.

    Env vars:
    - RECORDS_SERVER_URL: API root of the service. Default 'http://localhost:8888/v1'
    - RECORDS_BUCKET / RECORDS_COLLECTION: collection to browse ('default' / 'records')
    - RECORDS_USERNAME / RECORDS_PASSWORD: HTTP Basic credentials; anonymous when unset
    - RECORDS_REQUEST_TIMEOUT: per-request timeout in seconds (default 10)
    - RECORDS_DEFAULT_LIMIT: initial result-set cap (default 5, 'none' for unlimited)
    - RECORDS_TICK_INTERVAL: clock tick cadence in seconds (default 1.0)
    """

    server_url: str = "http://localhost:8888/v1"
    bucket: str = "default"
    collection: str = "records"
    username: Optional[str] = None
    password: Optional[str] = None
    request_timeout: float = 10.0
    default_limit: Optional[int] = DEFAULT_LIMIT
    tick_interval: float = 1.0

    @property
    def credentials(self) -> Optional[tuple[str, str]]:
        if self.username is None:
            return None
        return (self.username, self.password or "")


@dataclass(frozen=True)
class ServerSettings:
    """
    Settings of the local record service.

    Env vars:
    - RECORDS_PAGINATE_BY: server-side cap on page size; unset means no cap
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - ENABLE_BASIC_AUTH: 'true' to require HTTP Basic Auth (default: false)
    - BASIC_AUTH_USERNAME / BASIC_AUTH_PASSWORD: expected credentials when enabled
    """

    paginate_by: Optional[int] = None
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    enable_basic_auth: bool = False
    basic_auth_username: Optional[str] = None
    basic_auth_password: Optional[str] = None


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_float(value: str, default: float) -> float:
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_positive_int(value: str) -> Optional[int]:
    try:
        parsed = int(value.strip())
    except ValueError:
        return None
    return parsed if parsed > 0 else None


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_client_config() -> ClientConfig:
    """Return the record service client configuration loaded from environment variables."""
    username = os.getenv("RECORDS_USERNAME") or None
    password = os.getenv("RECORDS_PASSWORD") if username else None

    raw_limit = _get_env("RECORDS_DEFAULT_LIMIT", str(DEFAULT_LIMIT)).strip().lower()
    if raw_limit == "none":
        default_limit: Optional[int] = None
    else:
        default_limit = _parse_positive_int(raw_limit) or DEFAULT_LIMIT

    return ClientConfig(
        server_url=_get_env("RECORDS_SERVER_URL", "http://localhost:8888/v1").strip().rstrip("/"),
        bucket=_get_env("RECORDS_BUCKET", "default").strip(),
        collection=_get_env("RECORDS_COLLECTION", "records").strip(),
        username=username,
        password=password,
        request_timeout=_parse_float(_get_env("RECORDS_REQUEST_TIMEOUT", "10"), 10.0),
        default_limit=default_limit,
        tick_interval=_parse_float(_get_env("RECORDS_TICK_INTERVAL", "1"), 1.0),
    )


# PUBLIC_INTERFACE
def get_server_settings() -> ServerSettings:
    """Return local record service settings loaded from environment variables."""
    enable_basic_auth = _parse_bool(_get_env("ENABLE_BASIC_AUTH", "false"), False)
    return ServerSettings(
        paginate_by=_parse_positive_int(_get_env("RECORDS_PAGINATE_BY", "")),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        enable_basic_auth=enable_basic_auth,
        basic_auth_username=os.getenv("BASIC_AUTH_USERNAME") if enable_basic_auth else None,
        basic_auth_password=os.getenv("BASIC_AUTH_PASSWORD") if enable_basic_auth else None,
    )
