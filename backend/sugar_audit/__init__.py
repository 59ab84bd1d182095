"""Hidden-sugar and marketing-claim verification for packaged-food label text."""

__version__ = "1.0.0"
