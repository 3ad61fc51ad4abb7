"""Evaluator helper modules for the Monkey runtime."""

__all__ = [
    "blocks",
    "control",
    "expr",
    "fn",
    "helpers",
    "literals",
]
