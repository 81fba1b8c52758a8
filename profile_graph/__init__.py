"""Role knowledge graph generation from scraped web text."""

__version__ = "0.1.0"
