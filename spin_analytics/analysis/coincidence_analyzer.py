"""
Coincidence Analyzer — trigger → target-range hit rates.

For a rule "after trigger T, a number in [A, B] appears within W spins" this
measures how often the rule held historically, and sweeps W to find the
window at which each trigger converges fastest.
"""

from collections import Counter

from config import (
    WINDOW_SWEEP_MIN, WINDOW_SWEEP_MAX,
    HIGH_URGENCY_MAX_WINDOW, MEDIUM_TERM_MAX_WINDOW, URGENCY_LEVELS,
    LAST_SPINS_COUNT, DOZEN_RANGES,
)


def classify_urgency(best_window):
    """Map a best window size to its (urgency label, icon)."""
    if best_window <= HIGH_URGENCY_MAX_WINDOW:
        return URGENCY_LEVELS['high']
    if best_window <= MEDIUM_TERM_MAX_WINDOW:
        return URGENCY_LEVELS['medium']
    return URGENCY_LEVELS['low']


def _in_range(n, config):
    return config.target_range_start <= n <= config.target_range_end


class CoincidenceAnalyzer:
    def __init__(self):
        self.spin_history = []

    def update(self, number):
        self.spin_history.append(number)

    def load_history(self, history):
        self.spin_history = list(history)

    def _trigger_indices(self, trigger):
        return [i for i, n in enumerate(self.spin_history) if n == trigger]

    def analyze(self, configs):
        """Hit rate of each rule using its own configured window.

        A trigger on the final spin is skipped (nothing follows it); any other
        trigger inspects up to `window` following spins, clipped at the end.
        """
        history = self.spin_history
        last_index = len(history) - 1
        results = []

        for config in configs:
            trigger_count = 0
            hit_count = 0
            for i in self._trigger_indices(config.trigger):
                if i == last_index:
                    continue
                trigger_count += 1
                following = history[i + 1:i + 1 + config.window]
                if any(_in_range(n, config) for n in following):
                    hit_count += 1

            results.append({
                'config': config._asdict(),
                'trigger_count': trigger_count,
                'hit_count': hit_count,
                'percentage': hit_count / trigger_count * 100 if trigger_count > 0 else 0.0,
            })

        return results

    def optimize_windows(self, configs):
        """Sweep window sizes 2..10 per rule and pick the fastest-converging one.

        Validity here depends on the window: a trigger counts for window w
        only if w spins follow it. The best window is the smallest one that
        reaches the maximum percentage. Results come back fastest first.
        """
        history = self.spin_history
        n = len(history)
        results = []

        for config in configs:
            indices = self._trigger_indices(config.trigger)
            window_stats = []
            best_window = WINDOW_SWEEP_MIN
            best_percentage = -1.0

            for w in range(WINDOW_SWEEP_MIN, WINDOW_SWEEP_MAX + 1):
                valid = 0
                hits = 0
                for idx in indices:
                    if idx + w < n:
                        valid += 1
                        if any(_in_range(x, config) for x in history[idx + 1:idx + 1 + w]):
                            hits += 1

                percentage = hits / valid * 100 if valid > 0 else 0.0
                window_stats.append({
                    'window_size': w,
                    'valid_triggers': valid,
                    'hits': hits,
                    'percentage': percentage,
                })

                if percentage > best_percentage:
                    best_percentage = percentage
                    best_window = w

            urgency, icon = classify_urgency(best_window)
            results.append({
                'config': config._asdict(),
                'trigger_count': len(indices),
                'best_window': best_window,
                'best_percentage': best_percentage,
                'urgency': urgency,
                'efficiency_icon': icon,
                'window_stats': window_stats,
            })

        # Stable sort: equal best windows keep config order
        results.sort(key=lambda r: r['best_window'])
        return results

    def analyze_last_spins(self, coincidence_stats, count=LAST_SPINS_COUNT):
        """Alerts for configured triggers among the most recent spins.

        Args:
            coincidence_stats: output of analyze() for the same history
            count: how many recent spins to inspect
        """
        last_numbers = list(reversed(self.spin_history[-count:])) if self.spin_history else []
        alerts = []
        endings = Counter()

        for num in last_numbers:
            for stat in coincidence_stats:
                config = stat['config']
                if config['trigger'] != num:
                    continue
                alerts.append(
                    f"Number {num} came up recently. Historically, {num} → range "
                    f"{config['target_range_start']}–{config['target_range_end']} "
                    f"(next {config['window']} spins) hit {stat['percentage']:.1f}% "
                    f"of the time ({stat['hit_count']}/{stat['trigger_count']})."
                )
            endings[num % 10] += 1

        repeated = [{'ending': e, 'count': c} for e, c in endings.items() if c > 1]
        repeated.sort(key=lambda r: r['count'], reverse=True)

        return {
            'last_numbers': last_numbers,
            'alerts': alerts,
            'repeated_endings': repeated,
        }

    def analyze_ranges_by_target(self, target, lookahead):
        """Share of `target` occurrences followed by each dozen within `lookahead` spins."""
        history = self.spin_history
        result = [
            {'range': r['name'], 'min': r['min'], 'max': r['max'],
             'hits': 0, 'total': 0, 'probability': 0.0}
            for r in DOZEN_RANGES
        ]

        for i, num in enumerate(history):
            if num != target:
                continue
            following = history[i + 1:i + 1 + lookahead]
            for r in result:
                r['total'] += 1
                if any(r['min'] <= x <= r['max'] for x in following):
                    r['hits'] += 1

        for r in result:
            if r['total'] > 0:
                r['probability'] = round(r['hits'] / r['total'], 3)

        result.sort(key=lambda r: r['probability'], reverse=True)
        return result
