"""Registration, login and profile endpoints."""

from iam.presentation.auth.routes import router

__all__ = ["router"]
