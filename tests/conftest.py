import os
import sys

# Ensure `import mgrs2latlong` works when pytest is run from the repo root without installing
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)
