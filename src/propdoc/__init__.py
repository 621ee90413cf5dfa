"""propdoc — property brochure generation."""

__version__ = "0.1.0"
