#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/renderers/__init__.py
"""Renderers that turn the mdtool node tree back into text."""

from mdtool.renderers.base import BaseRenderer
from mdtool.renderers.context import RenderContextStack, RenderFrame
from mdtool.renderers.markdown import MarkdownRenderer

__all__ = ["BaseRenderer", "MarkdownRenderer", "RenderContextStack", "RenderFrame"]
