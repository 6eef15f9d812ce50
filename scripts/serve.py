#!/usr/bin/env python3
import argparse
import logging
import os
import sys

import uvicorn


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the Query wire codec HTTP service.")
    parser.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    parser.add_argument("--max-message-bytes", type=int, default=None,
                        help="Reject bodies larger than this (default: QUERY_WIRE_MAX_MESSAGE_BYTES or 64 MiB)")
    parser.add_argument("--reload", action="store_true", help="Run uvicorn with --reload (dev only)")
    parser.add_argument("--log-level", default="info", help="Log level (default: info)")
    args = parser.parse_args()

    if args.max_message_bytes is not None:
        if args.max_message_bytes < 1:
            print("--max-message-bytes must be >= 1")
            return 2
        # read at import time by wire.stream, so it has to be set before the app loads
        os.environ["QUERY_WIRE_MAX_MESSAGE_BYTES"] = str(args.max_message_bytes)

    logging.basicConfig(level=args.log_level.upper())

    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
