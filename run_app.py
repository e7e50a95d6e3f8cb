#!/usr/bin/env python3
"""
E-Waste Rewards Backend Runner
==============================

Usage:
    python run_app.py                    # Development server with auto-reload
    python run_app.py --mode prod        # Production mode, no reload
    python run_app.py --port 8001        # Custom port
    python run_app.py --host 127.0.0.1   # Custom host
    python run_app.py --init-db          # Create tables and exit
"""

import argparse
import asyncio
import os
import sys

import uvicorn

from ewaste_rewards.core.config import settings

def check_environment():
    """Report which configuration and database the server will use"""
    if os.path.exists(".env"):
        print(".env file found")
    else:
        print(".env file not found, using defaults")
    print(f"Database: {settings.DATABASE_URL}")

def init_database():
    from ewaste_rewards.core.database import init_db, close_db

    async def _run():
        await init_db()
        await close_db()

    asyncio.run(_run())
    print("Database tables created")

def run_main_app(host, port, reload, workers):
    """Run the FastAPI application"""
    print(f"\nStarting {settings.APP_NAME} on {host}:{port}")
    print(f"API Docs: http://{host}:{port}/api/docs")
    print("\n" + "=" * 50)

    uvicorn.run(
        "ewaste_rewards.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=1 if reload else workers,
        log_level=settings.LOG_LEVEL.lower()
    )

def main():
    parser = argparse.ArgumentParser(
        description="E-Waste Rewards Backend Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        choices=["dev", "prod"],
        default="dev",
        help="Server mode (default: dev)"
    )
    parser.add_argument("--host", default=settings.HOST, help="Host to bind to")
    parser.add_argument("--port", type=int, default=settings.PORT, help="Port to bind to")
    parser.add_argument("--workers", type=int, default=settings.WORKERS, help="Worker processes in prod mode")
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload")
    parser.add_argument("--init-db", action="store_true", help="Create database tables and exit")

    args = parser.parse_args()

    check_environment()

    if args.init_db:
        init_database()
        return 0

    reload = not args.no_reload and args.mode != "prod"
    run_main_app(args.host, args.port, reload, args.workers)
    return 0

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nServer stopped by user")
        sys.exit(0)
