"""Root-level conftest.py: ensure this checkout's prdash package is imported.

If prdash is also installed elsewhere (for example a non-editable install),
prepend the repository root so tests always exercise the working tree.
"""

import sys
from pathlib import Path

_repo_root = str(Path(__file__).parent)
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

# Drop any already-imported copy so the working tree's version is loaded.
for _mod in list(sys.modules):
    if _mod == "prdash" or _mod.startswith("prdash."):
        del sys.modules[_mod]
