"""
Analytics Engine — master orchestrator over all spin analyses.

Validates the settings once, puts the spins in chronological order, loads
every analyzer with the same history and collects their reports into one
JSON-serializable dict. The analyzers share no state, so the order they run
in does not matter.
"""

import time

from spin_analytics.analysis.settings import build_settings, validate_spins
from spin_analytics.analysis.gap_tracker import GapTracker
from spin_analytics.analysis.neighbor_analyzer import NeighborAnalyzer
from spin_analytics.analysis.coincidence_analyzer import CoincidenceAnalyzer
from spin_analytics.analysis.pattern_miner import PatternMiner
from spin_analytics.money.betting_simulator import BettingSimulator

from config import RANGE_LOOKAHEAD, LAST_SPINS_COUNT


def to_chronological(spins, chronological):
    """Oldest-first copy of `spins`; reversed when the caller pasted newest first."""
    ordered = list(spins)
    if not chronological:
        ordered.reverse()
    return ordered


class AnalyticsEngine:
    def __init__(self, settings=None):
        self.settings = build_settings(settings)
        self.gaps = GapTracker()
        self.neighbors = NeighborAnalyzer()
        self.coincidences = CoincidenceAnalyzer()
        self.patterns = PatternMiner()
        self.spin_history = []

    def load_history(self, spins):
        """Validate, order and hand the spins to every analyzer."""
        spins = validate_spins(spins)
        self.spin_history = to_chronological(spins, self.settings['chronological'])
        for analyzer in (self.gaps, self.neighbors, self.coincidences, self.patterns):
            analyzer.load_history(self.spin_history)

    @property
    def target_number(self):
        """Configured target, else the most recent spin, else 0."""
        if self.settings['target_number'] is not None:
            return self.settings['target_number']
        if self.spin_history:
            return self.spin_history[-1]
        return 0

    def get_gap_report(self):
        return self.gaps.get_summary(self.settings['recent_window_count'])

    def get_neighbor_report(self):
        window = self.settings['analysis_window_size']
        target = self.target_number
        return {
            'target': self.neighbors.analyze_target(target, window),
            'all_numbers': self.neighbors.analyze_all_numbers(window),
            'target_as_neighbor': self.neighbors.analyze_target_as_neighbor(
                target, self.settings['neighbor_radius']),
        }

    def get_coincidence_report(self):
        configs = self.settings['coincidence_configs']
        stats = self.coincidences.analyze(configs)
        return {
            'stats': stats,
            'optimized': self.coincidences.optimize_windows(configs),
            'last_spins': self.coincidences.analyze_last_spins(stats, LAST_SPINS_COUNT),
            'ranges_by_target': self.coincidences.analyze_ranges_by_target(
                self.target_number, RANGE_LOOKAHEAD),
        }

    def get_pattern_report(self):
        return self.patterns.get_summary(
            self.settings['pattern_window_size'], self.settings['min_occurrences'])

    def get_betting_report(self):
        simulator = BettingSimulator(self.settings['bankroll'], self.settings['stake_ladder'])
        return {
            'sequences': simulator.simulate_rotating(self.spin_history, 'sequences'),
            'squares': simulator.simulate_rotating(self.spin_history, 'squares'),
            'custom': simulator.simulate_custom(self.spin_history, self.settings['custom_numbers']),
        }

    def run(self, spins=None):
        """Run every analysis and return the combined report."""
        if spins is not None:
            self.load_history(spins)

        start = time.time()
        report = {
            'total_spins': len(self.spin_history),
            'spins': list(self.spin_history),
            'target_number': self.target_number,
            'gaps': self.get_gap_report(),
            'neighbors': self.get_neighbor_report(),
            'coincidences': self.get_coincidence_report(),
            'patterns': self.get_pattern_report(),
            'betting': self.get_betting_report(),
        }
        elapsed = time.time() - start
        print(f"[Engine] Analyzed {len(self.spin_history)} spins in {elapsed:.3f}s")
        report['elapsed_seconds'] = round(elapsed, 3)
        return report


def analyze(spins, settings=None):
    """One-shot helper: validate, order and analyze `spins`."""
    engine = AnalyticsEngine(settings)
    return engine.run(spins)
