"""Context assembly for model prompts."""

from .services import ContextService, order_files, render_context

__all__ = ["ContextService", "order_files", "render_context"]
