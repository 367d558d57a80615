#!/usr/bin/env python3
# =============================================================================
# scripts/start_server.py - API Server Entry Point
# =============================================================================
# Starts the Contact Manager API with uvicorn using the configured
# host and port.
#
# Usage:
#   poetry run python scripts/start_server.py
#
#   # Or use uvicorn directly
#   poetry run uvicorn app.main:app --reload
#
# Prerequisites:
#   - Environment variables must be set (.env file)
# =============================================================================

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import uvicorn

from app.config import settings


def main():
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    main()
