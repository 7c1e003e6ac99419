"""API routers module."""

from .phrases import router as phrases_router
from .tags import router as tags_router
from .review import router as review_router
from .stats import router as stats_router
from .translate import router as translate_router
from .export import router as export_router

__all__ = [
    "phrases_router",
    "tags_router",
    "review_router",
    "stats_router",
    "translate_router",
    "export_router",
]
