# FILE: grouping_core/constants.py
from __future__ import annotations
from typing import Dict, List

# --- Group size bounds ---
MIN_GROUP_SIZE = 2
MAX_GROUP_SIZE = 10
DEFAULT_GROUP_SIZE = 4

# --- Search budget ---
DEFAULT_MAX_ATTEMPTS = 32
SIMPLE_MAX_ATTEMPTS = 1  # no advanced rule enabled: one pass is enough

# --- Gender tokens (open set; these are only the ones the roster screens offer) ---
GENDER_MALE = "Male"
GENDER_FEMALE = "Female"
GENDER_NON_BINARY = "Non-binary"
GENDER_UNSPECIFIED = "Prefer not to say"

KNOWN_GENDERS: List[str] = [GENDER_MALE, GENDER_FEMALE, GENDER_NON_BINARY, GENDER_UNSPECIFIED]

# short forms accepted in roster CSVs; records built in code keep their tokens as given
GENDER_ALIASES: Dict[str, str] = {
    "m": GENDER_MALE,
    "male": GENDER_MALE,
    "f": GENDER_FEMALE,
    "female": GENDER_FEMALE,
    "nb": GENDER_NON_BINARY,
    "non-binary": GENDER_NON_BINARY,
    "nonbinary": GENDER_NON_BINARY,
}

# --- Placement scoring weights (lower score = better group) ---
# Ordering matters more than magnitude:
#   conflicts >> hard gender cap > soft balancing > fill ratio
FILL_WEIGHT = 5.0
CONFLICT_WEIGHT = 1000.0
ABILITY_WEIGHT = 100.0
GENDER_WEIGHT = 20.0
GENDER_CAP_BASE = 200.0
GENDER_CAP_STEP = 120.0
SUPPORT_UNMATCHED_PENALTY = 180.0
SUPPORT_PARTNER_JOINS_BONUS = 90.0
NEEDS_HELP_JOINS_BONUS = 60.0


# ---------------------
# Normalization helpers
# ---------------------
def normalize_gender(g) -> str:
    """Strip whitespace; blank -> unspecified. Any other token is kept verbatim."""
    if g is None:
        return GENDER_UNSPECIFIED
    s = str(g).strip()
    return s if s else GENDER_UNSPECIFIED


def import_gender_token(g) -> str:
    """Roster-file import only: common short forms -> canonical token, then normalize."""
    s = normalize_gender(g)
    return GENDER_ALIASES.get(s.lower(), s)
