"""
fleet_records.api.__main__

`python -m fleet_records.api` / `fleet-records-api`: serve the records API.
"""

from __future__ import annotations

import uvicorn

from fleet_records.api.app import create_app
from fleet_records.settings import get_settings


def main() -> None:
    settings = get_settings()
    # Request lines come from RequestContextMiddleware; uvicorn keeps its own
    # loggers quiet and unconfigured.
    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
