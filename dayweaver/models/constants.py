"""Constants for dayweaver.

This module centralizes all magic numbers and default values used by the scheduler.
"""


# Need tiers
DEFAULT_MANDATORY_THRESHOLD = 1.0  # need >= this is mandatory (tunable via config)
HIGH_NEED_THRESHOLD = 0.75
NEED_TOLERANCE = 1e-6

# Priority
PRIORITY_COMPONENT_CAP = 1.0  # need and importance are each capped before summing
PRIORITY_PRECISION = 6  # decimal places kept so 0.8 + 0.1 ties with 0.9

# Time
MINUTES_PER_DAY = 1440

# Search
DEFAULT_SEARCH_NODE_LIMIT = 5000

# Legacy greedy
KNAPSACK_RESOLUTION_MINUTES = 1
DEFAULT_PERMUTATION_LIMIT = 8  # groups larger than this keep priority order
ORDER_SCORE_WEIGHT = 10000  # one more placed suggestion outweighs any minutes
