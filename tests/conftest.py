"""
conftest.py: shared isolation for the glyphpack test suite.

Settings() reads GLYPHPACK_* variables from the environment, so every test
starts without them and gets the caller's values back afterwards.
"""
import os
import sys

import pytest

# Make the repo root importable when running without an editable install
_repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

_ENV_PREFIX = "GLYPHPACK_"


@pytest.fixture(autouse=True)
def _clean_env_vars():
    """Snapshot GLYPHPACK_* variables, clear them for the test, restore after."""
    saved = {k: v for k, v in os.environ.items() if k.startswith(_ENV_PREFIX)}
    for key in saved:
        os.environ.pop(key)

    yield

    for key in [k for k in os.environ if k.startswith(_ENV_PREFIX)]:
        os.environ.pop(key)
    os.environ.update(saved)
