"""FastAPI routers and dependencies."""

from snippetbox.api.clipboard import router as clipboard_router
from snippetbox.api.expansion import router as expansion_router
from snippetbox.api.logs import router as logs_router
from snippetbox.api.snippets import router as snippets_router
from snippetbox.api.templates import router as templates_router

__all__ = [
    "clipboard_router",
    "expansion_router",
    "logs_router",
    "snippets_router",
    "templates_router",
]
