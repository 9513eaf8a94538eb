"""Utility functions for common operations."""

from .ir_io import compute_intent_id, load_intent_document, load_ir_from_json, save_ir_to_json

__all__ = [
    "compute_intent_id",
    "load_intent_document",
    "load_ir_from_json",
    "save_ir_to_json",
]
