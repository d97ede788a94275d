from __future__ import annotations

import argparse
import logging
import time
from typing import cast

from .core.config import LOG_LEVELS, Settings
from .runtime.server import RegistryServer, run


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(prog="medregistry", description="medregistry: role and profile registry server")
    try:
        settings = Settings.from_env()
    except ValueError as e:
        p.error(str(e))

    p.add_argument("--host", default=settings.host)
    p.add_argument("--port", type=int, default=settings.port)
    p.add_argument("--owner", default=settings.owner, help="owner address (random when omitted)")
    p.add_argument("--log-level", default=settings.log_level, choices=sorted(LOG_LEVELS))
    args = p.parse_args(argv)

    logging.basicConfig(level=LOG_LEVELS[args.log_level])

    # new_server=True never attaches, so run() always returns a server here.
    srv = cast(
        RegistryServer,
        run(
            host=args.host,
            port=args.port,
            owner=args.owner,
            log_level=args.log_level,
            new_server=True,
        ),
    )
    print(f"Registry {srv.address} deployed, owner {srv.owner}")
    print(srv.url)

    # Block forever (so it behaves like a normal CLI server)
    while True:
        time.sleep(3600)


if __name__ == "__main__":
    main()
