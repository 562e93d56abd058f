import sys
from pathlib import Path

# Make core/, schemas/ importable without installation
root_dir = Path(__file__).parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))
