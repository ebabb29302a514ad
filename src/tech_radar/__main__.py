"""Run the API server with ``python -m tech_radar``."""

import uvicorn

from tech_radar.core.config import settings


def main() -> None:
    uvicorn.run(
        "tech_radar.main:app",
        host=settings.api_host,
        port=settings.api_port
    )


if __name__ == "__main__":
    main()
