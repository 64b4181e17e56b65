"""Output rendering module."""

from .render import render_human, render_json, render_selection

__all__ = ["render_human", "render_json", "render_selection"]
