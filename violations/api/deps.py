"""FastAPI dependencies for the violations API.

Provides shared dependencies (build repository, configuration) via
FastAPI's Depends() injection system.
"""

import logging

from fastapi import Request

logger = logging.getLogger(__name__)


async def get_build_repository(request: Request):
    """Get BuildRepository from app state."""
    return request.app.state.build_repository


async def get_config(request: Request):
    """Get ViolationsConfig from app state."""
    return request.app.state.config
