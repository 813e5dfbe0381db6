"""
Gap Tracker — hit counts, percentages and longest miss streaks per partition.

Two independent statistics are produced over the same spins:
  1. Raw occurrence: for each family (sequences, squares, sectors) how often
     each class hit and the longest run of spins it went without a hit.
  2. Rotating strategy: a fixed 1 → 2 → 3 → 2 cycle backs one "active"
     class at a time and only advances on a hit. Its gaps measure how long
     the strategy waited, which is a different question from (1).
"""

from collections import Counter

from config import (
    ROTATION_CYCLE, SECTOR_IDS, SECTORS,
)
from spin_analytics.analysis.wheel import PARTITIONS, build_owner_map, sector_of


def _percentage(hits, total):
    return hits / total * 100 if total > 0 else 0.0


class GapTracker:
    """Single-pass gap/streak scans over a chronological spin history."""

    def __init__(self):
        self.spin_history = []

    def update(self, number):
        """Add a new spin result."""
        self.spin_history.append(number)

    def load_history(self, history):
        """Load historical spin data (oldest first)."""
        self.spin_history = list(history)

    # ─── Raw occurrence scan ─────────────────────────────────────────

    def scan_family(self, family, partition=None):
        """Hits, percentage and max gap for every class of one partition family.

        Args:
            family: 'sequences', 'squares' or 'sectors' (label only when
                `partition` is given)
            partition: optional class id → numbers mapping overriding the
                built-in table for `family`

        Returns:
            dict with 'family', 'total_spins', 'classes' (class id → stats)
            and 'log' (per-spin hit class and gaps after the spin)
        """
        if partition is None:
            partition = PARTITIONS[family]
        owners = build_owner_map(partition)
        class_ids = list(partition)

        hits = {c: 0 for c in class_ids}
        current_gaps = {c: 0 for c in class_ids}
        max_gaps = {c: 0 for c in class_ids}
        gap_ranges = {c: '-' for c in class_ids}
        gap_starts = {c: 1 for c in class_ids}  # 1-based spin where the running gap began
        log = []

        for idx, num in enumerate(self.spin_history):
            spin_no = idx + 1
            hit_class = owners.get(num)

            if hit_class is not None:
                hits[hit_class] += 1
                current_gaps[hit_class] = 0
                gap_starts[hit_class] = spin_no + 1

            # Every class that did not hit (all of them for an unassigned spin)
            for c in class_ids:
                if c == hit_class:
                    continue
                current_gaps[c] += 1
                if current_gaps[c] > max_gaps[c]:
                    max_gaps[c] = current_gaps[c]
                    gap_ranges[c] = f'Spin {gap_starts[c]} to {spin_no}'

            log.append({
                'spin_index': spin_no,
                'number': num,
                'hit_class': hit_class,
                'gaps': dict(current_gaps),
            })

        total = len(self.spin_history)
        classes = {}
        for c in class_ids:
            classes[c] = {
                'hits': hits[c],
                'percentage': _percentage(hits[c], total),
                'current_gap': current_gaps[c],
                'max_gap': max_gaps[c],
                'max_gap_range': gap_ranges[c],
            }

        return {
            'family': family,
            'total_spins': total,
            'classes': classes,
            'log': log,
        }

    @staticmethod
    def best_class(classes):
        """Class with the highest raw percentage; the first one wins ties."""
        best_id = None
        best_pct = -1.0
        for class_id, stats in classes.items():
            if stats['percentage'] > best_pct:
                best_pct = stats['percentage']
                best_id = class_id
        return {'id': best_id, 'percentage': best_pct if best_id is not None else 0.0}

    # ─── Rotating strategy trace ─────────────────────────────────────

    def strategy_trace(self, partition=None, cycle=ROTATION_CYCLE):
        """Replay the rotating active-class strategy over the history.

        A spin is a strategy hit when the active class contains it. On a hit
        the cycle advances one step and that class's gap resets; on a miss
        the active class's gap grows and the cycle stays put.
        """
        if partition is None:
            partition = PARTITIONS['sequences']
        members = {c: set(nums) for c, nums in partition.items()}
        class_ids = list(partition)

        current_gaps = {c: 0 for c in class_ids}
        max_gaps = {c: 0 for c in class_ids}
        gap_details = {c: '-' for c in class_ids}
        gap_starts = {c: 1 for c in class_ids}
        strategy_hits = {c: 0 for c in class_ids}
        strategy_misses = {c: 0 for c in class_ids}
        log = []

        cycle_index = 0
        for idx, num in enumerate(self.spin_history):
            spin_no = idx + 1
            active = cycle[cycle_index]
            is_hit = num in members[active]

            if is_hit:
                strategy_hits[active] += 1
                current_gaps[active] = 0
                gap_starts[active] = spin_no + 1
                cycle_index = (cycle_index + 1) % len(cycle)
            else:
                strategy_misses[active] += 1
                current_gaps[active] += 1
                if current_gaps[active] > max_gaps[active]:
                    max_gaps[active] = current_gaps[active]
                    gap_details[active] = f'Between spin {gap_starts[active]} and {spin_no}'

            log.append({
                'spin_index': spin_no,
                'number': num,
                'active_before': active,
                'is_hit': is_hit,
                'active_after': cycle[cycle_index],
                'current_gap': current_gaps[active],
            })

        total = len(self.spin_history)
        total_hits = sum(strategy_hits.values())
        classes = {}
        for c in class_ids:
            classes[c] = {
                'hits': strategy_hits[c],
                'misses': strategy_misses[c],
                'current_gap': current_gaps[c],
                'max_gap': max_gaps[c],
                'max_gap_range': gap_details[c],
            }

        return {
            'cycle': list(cycle),
            'total_spins': total,
            'hits': total_hits,
            'misses': total - total_hits,
            'hit_percentage': _percentage(total_hits, total),
            'active_class': cycle[cycle_index],
            'classes': classes,
            'log': log,
        }

    # ─── Sector recency ──────────────────────────────────────────────

    def analyze_recent_sectors(self, recent_count):
        """Sector hit rates over the last `recent_count` spins, plus endings.

        Percentages use `recent_count` as the denominator even when fewer
        spins are available, so a short history reads as a partial window.
        """
        recent = self.spin_history[-recent_count:] if self.spin_history else []

        recent_hits = Counter(sector_of(n) for n in recent)
        recent_stats = {}
        for sector_id in SECTOR_IDS:
            count = recent_hits.get(sector_id, 0)
            recent_stats[sector_id] = {
                'hits': count,
                'percentage': _percentage(count, recent_count),
            }

        hottest = {'id': SECTOR_IDS[0], 'percentage': 0.0}
        for sector_id in SECTOR_IDS:
            if recent_stats[sector_id]['percentage'] > hottest['percentage']:
                hottest = {'id': sector_id, 'percentage': recent_stats[sector_id]['percentage']}

        # Last-digit endings and where they landed
        ending_counts = Counter()
        ending_sectors = {}
        for num in recent:
            ending = num % 10
            ending_counts[ending] += 1
            dist = ending_sectors.setdefault(ending, {s: 0 for s in SECTOR_IDS})
            dist[sector_of(num)] += 1

        endings = [
            {'ending': ending, 'count': count, 'sector_distribution': ending_sectors[ending]}
            for ending, count in ending_counts.items()
            if count > 1
        ]
        endings.sort(key=lambda e: e['count'], reverse=True)

        return {
            'recent_count': recent_count,
            'recent_numbers': list(recent),
            'recent_stats': recent_stats,
            'hottest_sector': hottest,
            'endings': endings,
            'sector_numbers': {s: list(SECTORS[s]) for s in SECTOR_IDS},
        }

    # ─── Combined report ─────────────────────────────────────────────

    def get_summary(self, recent_count):
        sequences = self.scan_family('sequences')
        squares = self.scan_family('squares')
        sectors = self.scan_family('sectors')

        return {
            'total_spins': len(self.spin_history),
            'sequences': sequences,
            'squares': squares,
            'sectors': sectors,
            'best_sequence': self.best_class(sequences['classes']),
            'best_square': self.best_class(squares['classes']),
            'strategy': self.strategy_trace(),
            'recent_sectors': self.analyze_recent_sectors(recent_count),
        }
