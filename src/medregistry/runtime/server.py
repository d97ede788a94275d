from __future__ import annotations

import contextlib
import logging
import socket
import threading
import time
from dataclasses import dataclass

import uvicorn

from ..core.config import Settings
from ..core.registry import InMemoryRegistry
from ..sdk.client import RegistryClient
from .app import create_app

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryServer:
    host: str
    port: int
    url: str
    registry: InMemoryRegistry

    @property
    def owner(self) -> str:
        return self.registry.owner

    @property
    def address(self) -> str:
        return self.registry.address

    def client(self, caller: str | None = None) -> RegistryClient:
        """HTTP client for this server, optionally bound to a caller address."""
        return RegistryClient(self.url.rstrip("/"), caller=caller)


def _find_free_port(host: str) -> int:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def _normalize_base_url(url: str) -> str:
    url = url.strip()
    if not url:
        return ""
    # Allow passing just host:port.
    if "://" not in url:
        url = "http://" + url
    return url.rstrip("/")


def _is_server_alive(base_url: str, *, timeout_s: float = 0.2) -> bool:
    """Best-effort check that a registry server is reachable."""

    import httpx

    try:
        with httpx.Client(base_url=base_url, timeout=timeout_s) as client:
            r = client.get("/healthz")
            if r.status_code != 200:
                return False
            data = r.json()
            return bool(data.get("ok"))
    except (httpx.HTTPError, ValueError):
        return False


def _wait_until_alive(base_url: str, *, timeout_s: float) -> bool:
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        if _is_server_alive(base_url):
            return True
        time.sleep(0.02)
    return False


def run(
    *,
    host: str = "127.0.0.1",
    port: int = 0,
    owner: str | None = None,
    log_level: str = "info",
    access_log: bool = False,
    new_server: bool = False,
    connect_timeout_s: float = 0.2,
    startup_timeout_s: float = 5.0,
) -> RegistryServer | RegistryClient:
    """Start a registry server in a background thread with a single call.

    Behavior:
    - If MEDREGISTRY_URL is set and reachable, attach to it (client mode) unless
      `new_server=True`.
    - Otherwise, if `port != 0` and a server is already reachable at http://{host}:{port},
      attach to it unless `new_server=True`.
    - Otherwise start a new registry owned by `owner` (a random address when
      omitted) and return a `RegistryServer`.
    """

    settings = Settings.from_env()
    env_url = _normalize_base_url(settings.url)

    # 1) Try attaching to an explicitly provided server.
    if env_url and not new_server:
        if _is_server_alive(env_url, timeout_s=connect_timeout_s):
            _LOGGER.info("attaching to registry at %s", env_url)
            return RegistryClient(env_url)

    # 2) Try attaching to host/port if they are explicitly chosen.
    if port != 0 and not new_server:
        default_url = _normalize_base_url(f"http://{host}:{port}")
        if _is_server_alive(default_url, timeout_s=connect_timeout_s):
            _LOGGER.info("attaching to registry at %s", default_url)
            return RegistryClient(default_url)

    # 3) Start a fresh server.
    if port == 0:
        port = _find_free_port(host)

    registry = InMemoryRegistry(owner=owner)
    app = create_app(registry, settings=settings)

    config = uvicorn.Config(app, host=host, port=port, log_level=log_level, access_log=access_log)
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    url = f"http://{host}:{port}/"
    if not _wait_until_alive(url.rstrip("/"), timeout_s=startup_timeout_s):
        raise RuntimeError(f"Registry server did not start on {url} within {startup_timeout_s}s")

    _LOGGER.info("registry %s listening on %s", registry.address, url)
    return RegistryServer(host=host, port=port, url=url, registry=registry)
