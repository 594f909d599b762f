"""Organizations presentation layer."""

from organizations.presentation.routes import router

__all__ = ["router"]
