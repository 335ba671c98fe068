"""MarkStack - markdown knowledge base generator."""

__version__ = "1.1.4"
