"""IAM presentation layer - aggregate-based organization.

Each package holds the routes and models of one slice: local auth,
users and roles.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation import auth, roles, users

# Access class and policies are declared per endpoint, not per router.
router = APIRouter()

router.include_router(auth.router)
router.include_router(users.router)
router.include_router(roles.router)

__all__ = ["router"]
