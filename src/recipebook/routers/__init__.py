"""API routers for the recipebook application."""

from recipebook.routers.recipes import router as recipes_router

__all__ = [
    "recipes_router",
]
