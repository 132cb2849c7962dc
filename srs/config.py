# Days until the next review, keyed by quality rating
INTERVAL_DAYS = {
    1: 1,    # again
    2: 3,    # hard
    3: 7,    # good
    4: 14,   # easy
    5: 30,   # very easy
}
# Applied when a rating falls outside INTERVAL_DAYS
FALLBACK_QUALITY = 1

DEFAULT_CARDS_PER_DAY = 20
MAX_CARDS_PER_DAY = 1000

UNKNOWN_CATEGORY = "Unknown"

# Sessions kept in process memory; the least recently used is closed first
MAX_OPEN_SESSIONS = 500
