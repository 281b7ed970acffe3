"""
Health check API route.
"""
from fastapi import APIRouter

from topictree import __version__

router = APIRouter()


@router.get("/health")
def health():
    """Server readiness check."""
    return {"status": "ready", "version": __version__}
