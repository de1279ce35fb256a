"""Template engine strategies.

Implements placeholder parsing, argument resolution and the three-pass
substitution pipeline for snippet templates.
"""

from snippetbox.strategies.template_engine.executor import SnippetExecutor, render_template
from snippetbox.strategies.template_engine.models import ArgumentSpec, ExecutionResult
from snippetbox.strategies.template_engine.parser import PlaceholderParser, extract_arguments
from snippetbox.strategies.template_engine.resolver import ArgumentResolver, resolve

__all__ = [
    "ArgumentSpec",
    "ExecutionResult",
    "PlaceholderParser",
    "ArgumentResolver",
    "SnippetExecutor",
    "extract_arguments",
    "resolve",
    "render_template",
]
