"""Utility functions for common operations."""

from .erd_io import load_erd_text, save_erd_text, save_result_json, load_result_json

__all__ = [
    "load_erd_text",
    "save_erd_text",
    "save_result_json",
    "load_result_json",
]
