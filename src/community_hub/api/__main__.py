"""
community_hub.api.__main__

Serve the API with uvicorn: `python -m community_hub.api` or the
`community-hub` console script.
"""

from __future__ import annotations

import uvicorn

from community_hub.api.app import create_app
from community_hub.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog owns the root handler
        access_log=False,  # RequestContextMiddleware emits request_completed
    )


if __name__ == "__main__":
    main()
