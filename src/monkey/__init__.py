"""Monkey: lexer, Pratt parser and tree-walking evaluator."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
