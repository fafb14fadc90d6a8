"""Run the server with uvicorn: ``python -m shserver``."""

import uvicorn

from shserver.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "shserver.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
