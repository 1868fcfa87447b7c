"""Shared utilities."""

from motif.utils.html import Markup, html_escape, html_unescape

__all__ = ["Markup", "html_escape", "html_unescape"]
