"""Run the adosync API server."""

from __future__ import annotations

import argparse
import os

import uvicorn

from adosync.api import create_app
from adosync.logging import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(prog="adosync", description=__doc__)
    parser.add_argument("--host", default=os.environ.get("ADOSYNC_HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("ADOSYNC_PORT", "8000")))
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args()

    setup_logging(level=args.log_level)
    uvicorn.run(create_app(), host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
