"""IAM presentation layer.

Organizes presentation concerns by use case. Each package contains its
own routes and models. Authentication routes are public: none of them
depends on the session cookie check.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation import auth

router = APIRouter()

router.include_router(auth.router)

__all__ = ["router"]
