"""Run `ztnet` from a source checkout: `python main.py network list`.

The installed `ztnet` script is the normal entry point; this only puts
`src/` on the import path first.
"""

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"

if __name__ == "__main__":
    sys.path.insert(0, str(SRC_DIR))

    from cli.main import run

    run()
