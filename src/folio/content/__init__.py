"""folio content pipeline — front matter, metadata, rendering, sanitizing, index."""

from folio.content.frontmatter import FrontMatterError, parse_header, split_front_matter
from folio.content.index import ContentIndex, LoadReport
from folio.content.metadata import build_metadata, extract_first_paragraph
from folio.content.models import Metadata, RawDocument, RenderedDetail
from folio.content.render import render_markdown
from folio.content.sanitize import sanitize_html
from folio.content.sources import (
    ContentSource,
    ContentSourceError,
    DirectorySource,
    MemorySource,
)

__all__ = [
    "ContentIndex",
    "ContentSource",
    "ContentSourceError",
    "DirectorySource",
    "FrontMatterError",
    "LoadReport",
    "MemorySource",
    "Metadata",
    "RawDocument",
    "RenderedDetail",
    "build_metadata",
    "extract_first_paragraph",
    "parse_header",
    "render_markdown",
    "sanitize_html",
    "split_front_matter",
]
