"""tablewatch — turn a card-table snapshot stream into events and notifications."""

__version__ = "0.1.0"
