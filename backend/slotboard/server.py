"""
Avvio dell'API con uvicorn.

    slotboard-server            # HOST/PORT da .env
    slotboard-server --reload   # sviluppo
"""
import argparse
import sys

import uvicorn

from .config import settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the slot board API")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args(argv)

    uvicorn.run(
        "slotboard.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
