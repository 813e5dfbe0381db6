"""
Configuration constants for the Roulette Spin Analytics engine.
Single source of truth for wheel layout, partitions and tunable parameters.
"""

import os

TOTAL_NUMBERS = 37  # 0-36

# ─── European Roulette Wheel Layout ──────────────────────────────────
# Physical wheel order (clockwise from 0)
WHEEL_ORDER = [
    0, 32, 15, 19, 4, 21, 2, 25, 17, 34, 6, 27, 13, 36,
    11, 30, 8, 23, 10, 5, 24, 16, 33, 1, 20, 14, 31, 9,
    22, 18, 29, 7, 28, 12, 35, 3, 26
]

# Number to wheel position mapping
NUMBER_TO_POSITION = {num: idx for idx, num in enumerate(WHEEL_ORDER)}

# ─── Partitions ───────────────────────────────────────────────────────
# Sequences: the three mod-3 classes of the table layout (0 excluded)
SEQUENCES = {
    1: [3, 6, 9, 12, 15, 18, 21, 24, 27, 30, 33, 36],
    2: [2, 5, 8, 11, 14, 17, 20, 23, 26, 29, 32, 35],
    3: [1, 4, 7, 10, 13, 16, 19, 22, 25, 28, 31, 34],
}

# Squares: numeric thirds, i.e. the dozens (0 excluded)
SQUARES = {
    1: [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12],
    2: [13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23, 24],
    3: [25, 26, 27, 28, 29, 30, 31, 32, 33, 34, 35, 36],
}

# Wheel sectors (French call bets); together they cover all 37 pockets
SECTORS = {
    'tier': [5, 8, 10, 11, 13, 16, 23, 24, 27, 30, 33, 36],
    'orphelins': [1, 6, 9, 14, 17, 20, 31, 34],
    'voisins': [0, 2, 3, 4, 7, 12, 15, 18, 19, 21, 22, 25, 26, 28, 29, 32, 35],
}

SECTOR_IDS = ('tier', 'orphelins', 'voisins')

BETTING_FAMILIES = ('sequences', 'squares')

# Rotating "active class" cycle: 1 → 2 → 3 → 2 → back to 1
ROTATION_CYCLE = (1, 2, 3, 2)

# Dozen-style ranges for the range-by-target analysis
DOZEN_RANGES = [
    {'name': '1–12', 'min': 1, 'max': 12},
    {'name': '13–24', 'min': 13, 'max': 24},
    {'name': '25–36', 'min': 25, 'max': 36},
]

# ─── Bankroll / Stake Ladder ──────────────────────────────────────────
# Fibonacci-like progression. On LOSS: advance one step (capped at the last
# entry). On WIN: reset to step 0.
INITIAL_BANKROLL = 500.0
DEFAULT_STAKE_LADDER = [3, 5, 8, 13, 21, 34, 55, 89, 144, 233, 377, 610, 987, 1597, 2584]

# ─── Payouts ──────────────────────────────────────────────────────────
DOZEN_PAYOUT = 2            # profit multiple on a winning 12-number bet (2:1)
STRAIGHT_RETURN = 36        # 35:1 plus the returned stake

# ─── Coincidence Rules ────────────────────────────────────────────────
# trigger → target range within the next `window` spins
DEFAULT_COINCIDENCES = [
    {'id': 'c1', 'trigger': 4, 'window': 10, 'target_range_start': 25, 'target_range_end': 29},
    {'id': 'c2', 'trigger': 8, 'window': 8, 'target_range_start': 16, 'target_range_end': 18},
    {'id': 'c3', 'trigger': 7, 'window': 10, 'target_range_start': 15, 'target_range_end': 18},
    {'id': 'c4', 'trigger': 2, 'window': 10, 'target_range_start': 10, 'target_range_end': 14},
    {'id': 'c5', 'trigger': 32, 'window': 10, 'target_range_start': 25, 'target_range_end': 29},
]

# ─── Window Optimization ──────────────────────────────────────────────
WINDOW_SWEEP_MIN = 2
WINDOW_SWEEP_MAX = 10
HIGH_URGENCY_MAX_WINDOW = 4         # best window <= 4 → High Urgency
MEDIUM_TERM_MAX_WINDOW = 7          # best window 5-7 → Medium Term, else Low Efficiency
URGENCY_LEVELS = {
    'high': ('High Urgency', '⭐'),
    'medium': ('Medium Term', '🟡'),
    'low': ('Low Efficiency', '🔴'),
}

# ─── Neighbour Analysis ──────────────────────────────────────────────
NEIGHBOR_K_MIN = 2
NEIGHBOR_K_MAX = 6
NEIGHBOR_WINDOW_SIZE = 1            # Trailing spins inspected after each target
NEIGHBOR_RADIUS = 3                 # k used by the "target as neighbour" query

# ─── Pattern Mining ──────────────────────────────────────────────────
PATTERN_WINDOW_SIZE = 5
PATTERN_MAX_WINDOW_SIZE = 9         # Triple enumeration is cubic in window size
PATTERN_MIN_OCCURRENCES = 3
PATTERN_TOP_N = 10
MIN_SPINS_FOR_CHI_SQUARE = 10

# ─── Recency ──────────────────────────────────────────────────────────
RECENT_SPINS_COUNT = 10             # Window for sector recency and endings
LAST_SPINS_COUNT = 10               # Window for trigger alerts
RANGE_LOOKAHEAD = 4                 # Spins inspected by the range-by-target analysis

# ─── Server Settings ─────────────────────────────────────────────────
HOST = '0.0.0.0'
PORT = 5050
DEBUG = False
SECRET_KEY = os.environ.get('SPIN_ANALYTICS_SECRET_KEY', 'roulette-spin-analytics-2024')
SOCKETIO_ASYNC_MODE = os.environ.get('SPIN_ANALYTICS_ASYNC_MODE', 'eventlet')
