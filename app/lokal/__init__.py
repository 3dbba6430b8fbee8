"""lokal - message catalogs, language negotiation and plural-aware rendering."""

__version__ = "0.1.0"
