from __future__ import annotations

import sys
from pathlib import Path

# Allows running the script from the repo root without installing.
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from tictactoe_db.cli import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main())
