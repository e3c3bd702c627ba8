"""Gadgets presentation layer."""

from gadgets.presentation.routes import router

__all__ = ["router"]
