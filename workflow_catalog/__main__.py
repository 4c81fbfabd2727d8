"""Run the catalog with uvicorn: ``python -m workflow_catalog``."""

import uvicorn

from workflow_catalog.config import settings


def main() -> None:
    uvicorn.run(
        "workflow_catalog.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
