"""Motif renderer: node trees in, HTML chunks out."""

from motif.renderer.core import Renderer

__all__ = ["Renderer"]
