#!/usr/bin/env python3
"""
Application startup script.
"""

import argparse
import os


def main():
    """Main startup function"""
    parser = argparse.ArgumentParser(description="BucketList Backend Server")
    parser.add_argument("--host", default=None, help="Host to bind to (overrides config)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to (overrides config)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (overrides config)")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode (overrides config)")
    parser.add_argument("--data-dir", default=None, help="Directory for saved places and preferences")

    args = parser.parse_args()

    # Settings are read at import time, so overrides go through the environment
    if args.data_dir:
        os.environ["STORAGE_DATA_DIR"] = args.data_dir
    if args.debug:
        os.environ["DEBUG"] = "true"

    from bucketlist.config.settings import reload_settings
    settings = reload_settings()

    host = args.host or settings.host
    port = args.port or settings.port
    reload = args.reload or settings.reload

    print(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    print(f"   Environment: {settings.environment.value}")
    print(f"   Host: {host}")
    print(f"   Port: {port}")
    print(f"   Data dir: {settings.get_data_dir()}")
    print(f"   Log Level: {settings.log_level.value}")

    import uvicorn

    uvicorn.run(
        "bucketlist.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.value.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
