"""Shared constants for the Drill scheduler."""

# Recall quality scale (0-5); ratings at or above PASSING_RATING count as a pass
MIN_RATING = 0
MAX_RATING = 5
PASSING_RATING = 3

# Subjective difficulty scale (1-5); NEUTRAL_DIFFICULTY leaves schedules untouched
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
NEUTRAL_DIFFICULTY = 3

# Response time (seconds) treated as neutral by the interval modifier
NEUTRAL_RESPONSE_TIME = 5.0
# Right answers quicker than this (seconds) rate as perfect recall
FAST_RESPONSE_TIME = 2.0

# Graduated base intervals (days)
FIRST_INTERVAL = 1
SECOND_INTERVAL = 6
LAPSE_INTERVAL = 1

# Ease factor adjustments
LAPSE_EASE_PENALTY = 0.2
DIFFICULTY_EASE_STEP = 0.1

# Items at or above this fraction of the maximum ease factor count as mastered
MASTERY_THRESHOLD = 0.9

# Plan duration estimate (minutes per entry)
NEW_ITEM_MINUTES = 2
REVIEW_MINUTES = 1

# Calendar events for scheduled reviews
REVIEW_EVENT_MINUTES = 15
