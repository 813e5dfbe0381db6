"""
Pattern Miner — numbers that keep showing up close together.

Sliding-window scans count unordered pairs and 3-number groups that occur
within a few spins of each other, plus a raw per-number frequency table with
a chi-square check against the uniform wheel.

Triple mining enumerates every 3-combination of the distinct values in each
window, so its cost grows with the cube of the window size. Keep the window
small (config.PATTERN_MAX_WINDOW_SIZE).
"""

from collections import Counter
from itertools import combinations

import numpy as np
from scipy import stats

from config import TOTAL_NUMBERS, PATTERN_TOP_N, MIN_SPINS_FOR_CHI_SQUARE


class PatternMiner:
    def __init__(self):
        self.spin_history = []

    def update(self, number):
        self.spin_history.append(number)

    def load_history(self, history):
        self.spin_history = list(history)

    def _percentage(self, count):
        total = len(self.spin_history)
        return count / total * 100 if total > 0 else 0.0

    def find_pairs(self, window_size, min_occurrences, top_n=PATTERN_TOP_N):
        """Unordered pairs seen within `window_size` spins of each other."""
        history = self.spin_history
        n = len(history)
        pair_counts = Counter()

        for i, current in enumerate(history):
            for j in range(i + 1, min(i + window_size + 1, n)):
                other = history[j]
                if other == current:
                    continue
                pair_counts[(min(current, other), max(current, other))] += 1

        pairs = [
            {
                'number1': a,
                'number2': b,
                'occurrences': count,
                'percentage': self._percentage(count),
            }
            for (a, b), count in pair_counts.items()
            if count >= min_occurrences
        ]
        pairs.sort(key=lambda p: p['occurrences'], reverse=True)
        return pairs[:top_n]

    def find_groups(self, window_size, min_occurrences, top_n=PATTERN_TOP_N):
        """3-number groups sharing a window of `window_size + 1` spins.

        Each occurrence also records how spread out the three numbers were
        inside that window (last position - first position).
        """
        history = self.spin_history
        group_counts = Counter()
        group_distances = {}

        for i in range(len(history)):
            window = history[i:i + window_size + 1]
            unique = sorted(set(window))
            if len(unique) < 3:
                continue

            # First position of each value inside this window
            positions = {}
            for pos, num in enumerate(window):
                positions.setdefault(num, pos)

            for group in combinations(unique, 3):
                group_counts[group] += 1
                spots = [positions[num] for num in group]
                group_distances.setdefault(group, []).append(max(spots) - min(spots))

        groups = [
            {
                'numbers': list(group),
                'occurrences': count,
                'percentage': self._percentage(count),
                'avg_distance': float(np.mean(group_distances[group])),
            }
            for group, count in group_counts.items()
            if count >= min_occurrences
        ]
        groups.sort(key=lambda g: g['occurrences'], reverse=True)
        return groups[:top_n]

    def get_frequent_numbers(self, top_n=PATTERN_TOP_N):
        """Most frequent numbers, count and share of all spins."""
        counts = Counter(self.spin_history)
        return [
            {'number': num, 'count': count, 'percentage': self._percentage(count)}
            for num, count in counts.most_common(top_n)
        ]

    def get_chi_square_result(self):
        """Chi-square goodness-of-fit test against a uniform wheel."""
        if len(self.spin_history) < MIN_SPINS_FOR_CHI_SQUARE:
            return {'statistic': 0.0, 'p_value': 1.0, 'significant': False}

        observed = np.bincount(self.spin_history, minlength=TOTAL_NUMBERS)
        expected = np.full(TOTAL_NUMBERS, len(self.spin_history) / TOTAL_NUMBERS)

        chi2, p_value = stats.chisquare(observed, expected)
        return {
            'statistic': float(chi2),
            'p_value': float(p_value),
            'significant': bool(p_value < 0.05),
        }

    def get_summary(self, window_size, min_occurrences):
        return {
            'total_spins': len(self.spin_history),
            'window_size': window_size,
            'min_occurrences': min_occurrences,
            'top_pairs': self.find_pairs(window_size, min_occurrences),
            'top_groups': self.find_groups(window_size, min_occurrences),
            'frequent_numbers': self.get_frequent_numbers(),
            'chi_square': self.get_chi_square_result(),
        }
