# python -m eventboard

import uvicorn

from eventboard.core.config import settings


def main() -> None:
    uvicorn.run(
        "eventboard.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
