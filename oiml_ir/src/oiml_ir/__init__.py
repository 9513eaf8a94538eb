"""OIML IR: intent documents to versioned intermediate representation."""

__version__ = "0.1.0"
