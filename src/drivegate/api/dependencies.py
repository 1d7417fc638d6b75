"""FastAPI dependencies for drivegate routes."""

from fastapi import Request

from ..manager import GatewayManager


def get_manager(request: Request) -> GatewayManager:
    """Dependency to get the manager wired into the running app."""
    return request.app.state.manager
