"""Dependency injection for FastAPI endpoints"""

from datetime import date

from fastapi import Request
from finance_tracker.infrastructure.clients.advice import AdviceClient
from finance_tracker.utils.date_utils import local_today


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Provide today's date in the configured timezone"""
    return local_today()


def get_advice_client() -> AdviceClient:
    """Provide advice API client instance"""
    return AdviceClient()
