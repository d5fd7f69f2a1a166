"""
Entry point for the polyline offset service.

Running this script with ``python run.py`` will start the FastAPI
server defined in ``backend/app/main.py``.  The bind address and log
level are read from the ``POLYOFFSET_HOST``, ``POLYOFFSET_PORT`` and
``POLYOFFSET_LOG_LEVEL`` environment variables.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import logging
import uvicorn

logging.basicConfig(
    level=os.getenv("POLYOFFSET_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> None:
    """Run the Uvicorn server hosting the offset API."""
    # Determine the repository root relative to this file and ensure it is on
    # sys.path so that ``backend`` can be imported as a package.
    repo_root = Path(__file__).resolve().parent
    if str(repo_root) not in sys.path:
        sys.path.append(str(repo_root))

    # Import the FastAPI application.  We import inside main() to avoid
    # modifying sys.path at module import time.
    from backend.app.main import app  # type: ignore

    host = os.getenv("POLYOFFSET_HOST", "0.0.0.0")
    port = int(os.getenv("POLYOFFSET_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
