"""
Shared pytest setup: project root on sys.path, threading async mode for the
SocketIO test client, and a real-looking spin sample.
"""
import os
import sys

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..')
sys.path.insert(0, PROJECT_ROOT)

# The test client does not need a green-thread server
os.environ.setdefault('SPIN_ANALYTICS_ASYNC_MODE', 'threading')

import pytest


# Recorded table session, oldest first
SAMPLE_SPINS = [18, 26, 28, 35, 16, 28, 22, 35, 1, 20, 3, 35, 20, 23, 7, 24, 22, 2, 33, 35,
                12, 30, 27, 11, 9, 10, 9, 20, 16, 31, 4, 3, 16, 20, 34, 13, 28, 3, 15, 33,
                12, 11, 26, 23, 15, 36, 1, 25, 28, 32, 14, 6, 12, 16, 3, 6, 1, 35, 18, 8,
                30, 21, 29, 4, 8, 28, 1, 30, 4, 10, 30, 23, 36, 29, 28, 13, 3, 34, 9, 31,
                1, 2, 18, 25, 32, 6, 16, 16, 19, 35, 16, 32, 30, 21, 25, 36, 21, 27, 7, 6,
                9, 15, 23, 3, 2, 23, 21, 8, 17, 1, 31, 36, 17, 25, 16, 8, 26, 8, 32, 22,
                36, 14, 13, 33, 18, 13, 6, 3, 4, 8, 32, 33, 15, 18, 34, 25, 0, 26, 35, 1,
                34, 23, 35, 26, 18, 8, 24, 30, 16, 12, 8, 23, 34, 13, 23, 3, 21, 31, 16, 14,
                20, 21, 29, 3, 34, 14, 10, 1, 18, 25, 27, 17, 27, 36, 23, 4, 34, 12, 12, 3,
                9, 7, 20, 16, 10]


@pytest.fixture
def sample_spins():
    return list(SAMPLE_SPINS)
