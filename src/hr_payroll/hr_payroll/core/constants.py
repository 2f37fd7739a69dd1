"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_CURRENCY_PLACES = 2
MAX_PERCENTAGE = 100

DEFAULT_LATE_CUTOFF = time(8, 30)
DEFAULT_ABSENT_CUTOFF = time(14, 0)

DEFAULT_PROVIDENT_FUND_NAMES = ("provident fund", "pf")

DEFAULT_LOCK_TIMEOUT_SECONDS = 5.0
DEFAULT_DB_TIMEOUT_SECONDS = 10
DEFAULT_DRAFT_TTL_SECONDS = 30 * 60

DEFAULT_ACTOR_HEADER = "X-Actor-Id"
DEFAULT_ROLE_HEADER = "X-Actor-Role"
