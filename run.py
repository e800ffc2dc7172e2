"""Launch the island simulation from a source checkout."""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

from island_sim.main import main  # noqa: E402

if __name__ == "__main__":
    main()
