"""
Neighbour Analyzer — how often a spin lands near a target on the physical wheel.

Forward analysis: after each occurrence of a target, does any of the next
`window_size` spins fall within ±k pockets of the target? Swept over k=2..6.

Inverse analysis ("target as neighbour"): which centres' ±k neighbourhoods,
containing the target, also covered the spin that followed the target?

The two analyses use different validity rules. Forward
occurrences need a full trailing window (i + window_size < len); inverse
occurrences only need a following spin (i + 1 < len).
"""

import numpy as np

from config import TOTAL_NUMBERS, NEIGHBOR_K_MIN, NEIGHBOR_K_MAX
from spin_analytics.analysis.wheel import get_neighbors, get_centers_covering


K_VALUES = tuple(range(NEIGHBOR_K_MIN, NEIGHBOR_K_MAX + 1))


class NeighborAnalyzer:
    def __init__(self):
        self.spin_history = []

    def update(self, number):
        self.spin_history.append(number)

    def load_history(self, history):
        self.spin_history = list(history)

    def _valid_occurrences(self, target, window_size):
        n = len(self.spin_history)
        return [i for i, num in enumerate(self.spin_history)
                if num == target and i + window_size < n]

    def _count_window_hits(self, indices, window_size, neighbor_set):
        hits = 0
        for idx in indices:
            following = self.spin_history[idx + 1:idx + 1 + window_size]
            if any(spin in neighbor_set for spin in following):
                hits += 1
        return hits

    def analyze_target(self, target, window_size):
        """Hit rate of target's wheel neighbours in the trailing window, per k.

        Returns:
            dict with 'target_number', 'window_size', 'target_occurrences',
            'valid_occurrences', 'neighbor_stats' (one row per k), 'best_k'
            and 'best_percentage'
        """
        total_occurrences = sum(1 for num in self.spin_history if num == target)
        valid = self._valid_occurrences(target, window_size)
        valid_count = len(valid)

        neighbor_stats = []
        best_k = K_VALUES[0]
        best_percentage = 0.0

        for k in K_VALUES:
            neighbor_set = get_neighbors(target, k)
            hits = self._count_window_hits(valid, window_size, neighbor_set)
            percentage = hits / valid_count * 100 if valid_count > 0 else 0.0

            neighbor_stats.append({
                'k': k,
                'numbers': sorted(neighbor_set),
                'hits': hits,
                'total_occurrences': valid_count,
                'percentage': percentage,
            })

            # Strict > keeps the smallest k on ties
            if percentage > best_percentage:
                best_percentage = percentage
                best_k = k

        return {
            'target_number': target,
            'window_size': window_size,
            'target_occurrences': total_occurrences,
            'valid_occurrences': valid_count,
            'neighbor_stats': neighbor_stats,
            'best_k': best_k,
            'best_percentage': best_percentage,
        }

    def get_neighbor_matrix(self, window_size):
        """(37, len(K_VALUES)) array of hit percentages, row = target number."""
        matrix = np.zeros((TOTAL_NUMBERS, len(K_VALUES)), dtype=np.float64)
        for target in range(TOTAL_NUMBERS):
            valid = self._valid_occurrences(target, window_size)
            if not valid:
                continue
            for col, k in enumerate(K_VALUES):
                hits = self._count_window_hits(valid, window_size, get_neighbors(target, k))
                matrix[target, col] = hits / len(valid) * 100
        return matrix

    def analyze_all_numbers(self, window_size):
        """Forward analysis repeated for every pocket, for comparative tables."""
        matrix = self.get_neighbor_matrix(window_size)
        rows = []
        for target in range(TOTAL_NUMBERS):
            rows.append({
                'number': target,
                'occurrences': len(self._valid_occurrences(target, window_size)),
                'percentages': {k: float(matrix[target, col]) for col, k in enumerate(K_VALUES)},
            })

        return {
            'window_size': window_size,
            'k_values': list(K_VALUES),
            'rows': rows,
            'total_spins': len(self.spin_history),
        }

    def analyze_target_as_neighbor(self, target, k):
        """Which centres covering `target` also covered the spin after it.

        Only centres with at least one hit are returned, best hit rate first.
        """
        centers = get_centers_covering(target, k)
        center_sets = {c: get_neighbors(c, k) for c in centers}
        stats = {
            c: {
                'center': c,
                'k': k,
                'target_occurrences': 0,
                'hits': 0,
                'covered_numbers': [],
                'percentage': 0.0,
            }
            for c in centers
        }

        history = self.spin_history
        for i in range(len(history) - 1):
            if history[i] != target:
                continue
            next_num = history[i + 1]
            for c in centers:
                entry = stats[c]
                entry['target_occurrences'] += 1
                if next_num in center_sets[c]:
                    entry['hits'] += 1
                    entry['covered_numbers'].append(next_num)

        results = []
        for c in centers:
            entry = stats[c]
            if entry['target_occurrences'] > 0:
                entry['percentage'] = entry['hits'] / entry['target_occurrences'] * 100
            if entry['hits'] > 0:
                results.append(entry)

        results.sort(key=lambda e: e['percentage'], reverse=True)

        return {
            'target': target,
            'k': k,
            'candidate_centers': centers,
            'centers': results,
        }
