"""Core type definitions."""

from typing import NewType

# URL path for generated pages (e.g., "/", "/guide/", "/guide/getting-started")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)

# Reserved file name supplying a section's own title, description and body
INDEX_FILENAME = "_index.md"

MARKDOWN_SUFFIX = ".md"
