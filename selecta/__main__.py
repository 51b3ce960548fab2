"""Run the API server: python -m selecta."""

import uvicorn

from selecta.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "selecta.main:app",
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
