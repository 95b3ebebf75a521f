#!/usr/bin/env python3
"""
Simple run script for AlertFlow.

Usage:
    python run.py

Or with custom settings:
    HOST=127.0.0.1 PORT=8080 python run.py
"""

import uvicorn
import os


def main():
    """Run the FastAPI application."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "true").lower() == "true"

    print(f"""
AlertFlow
  Server:    http://{host}:{port}
  API Docs:  http://{host}:{port}/docs
  Sample workflow: 550e8400-e29b-41d4-a716-446655440000
    """)

    uvicorn.run(
        "alertflow.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
