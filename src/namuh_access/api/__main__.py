"""
namuh_access.api.__main__

Entrypoint: `python -m namuh_access.api [--host H] [--port P] [--log-level L]`.

Flags override the `NAMUH_*` environment for a single run.
"""

from __future__ import annotations

import argparse

import uvicorn

from namuh_access.api.app import create_app
from namuh_access.settings import get_settings


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="namuh-access")
    parser.add_argument("--host")
    parser.add_argument("--port", type=int)
    parser.add_argument("--log-level")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    overrides = {
        key: value
        for key, value in (
            ("api_host", args.host),
            ("api_port", args.port),
            ("log_level", args.log_level),
        )
        if value is not None
    }
    settings = get_settings().model_copy(update=overrides)
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
