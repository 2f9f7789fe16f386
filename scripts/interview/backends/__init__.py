"""
Interview Backends
Presentation surfaces driving the shared interview engine
"""

from .console import ConsoleBackend
from .document import render_html, render_markdown
from .scripted import ScriptedBackend

__all__ = [
    "ConsoleBackend",
    "ScriptedBackend",
    "render_html",
    "render_markdown",
]
