# tests/conftest.py
import sys
from pathlib import Path

# Add project root (for tests.config_manager) and src to Python path
_project_root = Path(__file__).parent.parent
for path in (_project_root / "src", _project_root):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
