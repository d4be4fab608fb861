from __future__ import annotations

import os

# Palette / search defaults.
DEFAULT_MAX_COLORS: int = 4
DEFAULT_SOLVER: str = "backtracking"

# Timeouts are opt-in for the library drivers; the CLI and HTTP API pass these.
DEFAULT_TIMEOUT_MS: int = 30_000
MAX_TIMEOUT_MS: int = 1_000_000

# Upper bound on retained steps per trace (counting continues past it).
MAX_TRACE_STEPS: int = 10_000

LOG_LEVEL: str = os.environ.get("MAP_COLORING_LOG_LEVEL", "INFO").upper()
