"""API routes for the package editor."""
from .routes import router

__all__ = ["router"]
