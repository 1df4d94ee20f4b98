"""View adapter - template rendering with jinja2.

Contents:
    * :class:`.jinja.JinjaViewRenderer` - ViewRenderer backed by jinja2
"""

from __future__ import annotations

from .jinja import JinjaViewRenderer

__all__ = ["JinjaViewRenderer"]
