"""Central configuration for the playoff prediction pool."""

import os

# Scoring: (base points for the correct winner, bonus for the correct length)
# The bonus is only awarded when the winner is also correct.
ROUND_POINTS = {
    "FIRST_ROUND": (8, 6),
    "CONFERENCE_SEMIFINALS": (12, 8),
    "CONFERENCE_FINALS": (16, 10),
    "FINALS": (24, 12),
}

# Series id patterns, tested in order from most to least specific.
# Two naming schemes are in use: "ESF1"/"ECF"/"Finals" and "E1v4"/"E1v2"/"EWF".
SERIES_ID_PATTERNS = [
    ("FINALS", r"^(Finals|EWF)$"),
    ("CONFERENCE_FINALS", r"^[EW](CF|1v2)$"),
    ("CONFERENCE_SEMIFINALS", r"^[EW](SF[12]|1v4|2v3)$"),
    ("FIRST_ROUND", r"^[EW](1v8|2v7|3v6|4v5)$"),
]

# Best-of-seven: a series lasts 4 to 7 games
SERIES_LENGTHS = (4, 5, 6, 7)

# Placeholder used by the results document for undecided series
UNDECIDED_WINNER = "TBD"

# Solver settings
DEFAULT_MAX_PATHS = 5
DEFAULT_MAX_NODES = None  # no node budget unless the caller asks for one
CLI_MAX_NODES = 1_000_000  # contenders and road stop here and report "unknown"

# Remote results store (read-only)
JSONBIN_BASE_URL = "https://api.jsonbin.io/v3"
JSONBIN_API_KEY_ENV = "JSONBIN_API_KEY"
HTTP_TIMEOUT = 30

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")
