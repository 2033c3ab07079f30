# src/fourline/config.py

from __future__ import annotations

import os

ROWS = 6
COLS = 7
CONNECT_N = 4

# Search horizon in plies for the alpha-beta engine
SEARCH_DEPTH = 5

# Headless match defaults
MATCH_GAMES = 4
MATCH_SEED = 1234
RESULTS_DIR = "data/results"

# Logging
LOG_LEVEL = os.getenv("FOURLINE_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
