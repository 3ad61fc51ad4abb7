from __future__ import annotations

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parent.parent
SRC_DIR = (BASE_DIR / "src").resolve()

# `monkey` from src/ without an install; BASE_DIR for `tests.support`.
for path in (SRC_DIR, BASE_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from monkey.runtime import init_stdlib


@pytest.fixture(autouse=True, scope="session")
def _builtins_registered() -> None:
    """Builtin lookups in unit tests must not depend on which test ran first."""
    init_stdlib()
