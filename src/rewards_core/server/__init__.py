"""HTTP adapter for the reward queries (FastAPI)."""

from rewards_core.server.app import build_router, create_app

__all__ = ["build_router", "create_app"]
