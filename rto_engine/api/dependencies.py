"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from rto_engine.config import settings
from rto_engine.domain.policy import EnginePolicy


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_policy() -> EnginePolicy:
    """Provide the scoring policy configured for this deployment"""
    return settings.engine_policy()
