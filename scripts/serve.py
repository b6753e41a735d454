#!/usr/bin/env python3
"""
Start the plan store API.
Refuses to serve when the configuration is invalid or the storage backend is unreachable.
"""

import argparse
import os
import sys
from pathlib import Path

# Add the parent directory to sys.path to import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from plan_store.core import config
from plan_store.core.db import create_backend
from plan_store.util.logging import logger


def main(argv=None):
    parser = argparse.ArgumentParser(description='Serve the plan store API')
    parser.add_argument('--host', default=config.HOST,
                        help=f'Interface to bind (default: {config.HOST})')
    parser.add_argument('--port', type=int, default=config.PORT,
                        help=f'Port to listen on (default: {config.PORT})')
    parser.add_argument('--backend', choices=config.SUPPORTED_BACKENDS,
                        help='Storage backend (overrides STORE_BACKEND)')
    parser.add_argument('--reload', action='store_true',
                        help='Reload on code changes (development only)')
    args = parser.parse_args(argv)

    if args.backend:
        os.environ["STORE_BACKEND"] = args.backend

    issues = config.validate_config()
    if issues:
        for issue in issues:
            logger.error(f"Configuration error: {issue}")
        return 2

    backend = create_backend()
    ready = backend.is_ready()
    backend.close()
    if not ready:
        logger.error(f"Failed to connect to {backend.name} storage backend, not starting")
        return 1

    logger.info(f"Starting server on {args.host}:{args.port} with {backend.name} backend")
    uvicorn.run(
        "plan_store.api.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.LOG_LEVEL.lower()
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
