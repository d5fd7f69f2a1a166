"""Shared pytest configuration for the backend tests.

Points the polyline registry at a throwaway SQLite database before any
test module imports the application, so test runs never touch the
database under ``backend/storage``.
"""

import os
import tempfile
from pathlib import Path

_TMP_DIR = Path(tempfile.mkdtemp(prefix="polyoffset-tests-"))
os.environ.setdefault("POLYOFFSET_DB_URL", f"sqlite:///{(_TMP_DIR / 'test.db').as_posix()}")
