"""Render pipeline and static export built on the content engine."""

from .link_rewriter import ContentLinkExtension
from .models import RenderedDocument, TocEntry
from .query import ContentQuery
from .renderer import DocumentRenderer
from .site_builder import SiteBuilder

__all__ = [
    "ContentLinkExtension",
    "ContentQuery",
    "DocumentRenderer",
    "RenderedDocument",
    "SiteBuilder",
    "TocEntry",
]
