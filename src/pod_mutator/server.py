"""Runtime launcher for the admission webhook (HTTPS by default)."""

from __future__ import annotations

import os

import uvicorn

from pod_mutator.common.config import Config, Option

_VALID_UVICORN_LOG_LEVELS = {"critical", "error", "warning", "info", "debug", "trace"}


def _parse_log_level(log_level: str) -> str:
    level = log_level.strip().lower()
    if level in _VALID_UVICORN_LOG_LEVELS:
        return level
    return "info"


def _parse_reload_flag(reload: str | None) -> bool:
    if reload is None:
        return False
    return reload.strip().lower() in {"1", "true", "yes", "on"}


def _parse_socket_port(port: str) -> int:
    try:
        return int(port.strip())
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Invalid app.socket_port value '{port}': expected integer") from exc


def _extract_host(socket_address: str) -> str:
    host: str = socket_address
    if socket_address.startswith("http://"):
        host = socket_address.removeprefix("http://")
    if socket_address.startswith("https://"):
        host = socket_address.removeprefix("https://")
    return host.strip("/")


def _tls_options(config: Config) -> dict[str, str]:
    """The API server only calls webhooks over HTTPS; disable TLS only behind a terminating proxy"""
    if not config.get_bool(Option.TLS_ENABLED, True):
        return {}
    return {
        "ssl_certfile": str(config.get(Option.TLS_CERT_FILE, "/tls/tls.crt")),
        "ssl_keyfile": str(config.get(Option.TLS_KEY_FILE, "/tls/tls.key")),
    }


def run() -> None:
    config = Config()

    socket_port = _parse_socket_port(str(config.get(Option.SOCKET_PORT, "8080")))
    log_level = _parse_log_level(str(config.get(Option.LOG_LEVEL, "info")))
    reload_enabled = _parse_reload_flag(os.getenv("UVICORN_RELOAD"))

    host = _extract_host(str(config.get(Option.SOCKET_ADDRESS, "0.0.0.0")))
    if not host:
        raise ValueError("Invalid app.socket_address value: empty host")
    if socket_port <= 0:
        raise ValueError("Invalid app.socket_port value: expected > 0")

    uvicorn.run(
        "pod_mutator.microservice:app",
        host=host,
        port=socket_port,
        log_level=log_level,
        reload=reload_enabled,
        **_tls_options(config),
    )


if __name__ == "__main__":
    run()
