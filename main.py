"""
Main entry point for the SOS content backend.

Starts the API server. The schema is reconciled by the app's startup hook
before the first request is accepted.
"""

import uvicorn

from config.settings import settings


def main():
    uvicorn.run(
        "api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
