"""Run the user service under uvicorn.

Host, port and log level come from ``USER_SERVICE_HOST``,
``USER_SERVICE_PORT`` and ``USER_SERVICE_LOG_LEVEL``.

Usage:
    python -m user_service
"""
import uvicorn

from user_service.services.config import settings


def main() -> None:
    uvicorn.run(
        "user_service.entrypoints.api:app",
        host=settings.USER_SERVICE_HOST,
        port=settings.USER_SERVICE_PORT,
        log_level=settings.USER_SERVICE_LOG_LEVEL.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
