"""Run the API with ``python -m bizcoach.api``."""

import uvicorn

from bizcoach.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "bizcoach.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
