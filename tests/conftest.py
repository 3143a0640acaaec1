from __future__ import annotations

import sys
from pathlib import Path


def pytest_configure() -> None:
    # Keep `import assistant_ws` and `import linting` working without an install.
    repo_root = str(Path(__file__).resolve().parents[1])
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)
