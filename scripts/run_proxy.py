#!/usr/bin/env python3
"""
Run the dark pool payment proxy with uvicorn.

Reads .env / environment once, then serves:
- POST /entrypoints/submit/invoke
- GET  /.well-known/agent.json
- GET  /health
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from src.api import main as api_main


def main() -> int:
    parser = argparse.ArgumentParser(description="Serve the dark pool payment proxy")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind (default: $PORT or 8080)")
    parser.add_argument("--mock-backend", action="store_true", help="Use the in-process mock backend")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    settings = api_main.settings
    updates = {}
    if args.port is not None:
        updates["port"] = args.port
    if args.mock_backend:
        updates["integrations_mode"] = "mock"
    if args.verbose:
        updates["log_level"] = "DEBUG"
    app = api_main.app
    if updates:
        settings = settings.model_copy(update=updates)
        api_main.configure_logging(settings.log_level)
        app = api_main.create_app(settings)

    uvicorn.run(app, host=args.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
