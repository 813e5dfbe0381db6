"""
SocketIO Event Handlers - WebSocket events for the analysis dashboard.
Handles spin import, full analysis runs and the interactive neighbour queries.
"""

import time
import traceback

from flask_socketio import emit

from spin_analytics import socketio
from spin_analytics.analysis.engine import AnalyticsEngine
from spin_analytics.analysis.settings import SettingsError
from spin_analytics.parsing import spins_from_payload, settings_from_payload, load_neighbor_request

from config import (
    INITIAL_BANKROLL, DEFAULT_STAKE_LADDER, DEFAULT_COINCIDENCES,
    NEIGHBOR_WINDOW_SIZE, NEIGHBOR_RADIUS, RECENT_SPINS_COUNT,
    PATTERN_WINDOW_SIZE, PATTERN_MIN_OCCURRENCES,
)

print("[Startup] Spin analytics handlers registered")


def _defaults():
    return {
        'bankroll': INITIAL_BANKROLL,
        'stake_ladder': DEFAULT_STAKE_LADDER,
        'coincidence_configs': DEFAULT_COINCIDENCES,
        'analysis_window_size': NEIGHBOR_WINDOW_SIZE,
        'neighbor_radius': NEIGHBOR_RADIUS,
        'recent_window_count': RECENT_SPINS_COUNT,
        'pattern_window_size': PATTERN_WINDOW_SIZE,
        'min_occurrences': PATTERN_MIN_OCCURRENCES,
    }


@socketio.on('connect')
def handle_connect():
    emit('connected', {
        'message': 'Connected to Roulette Spin Analytics',
        'defaults': _defaults(),
    })


@socketio.on('get_defaults')
def handle_get_defaults():
    emit('defaults', _defaults())


@socketio.on('analyze')
def handle_analyze(data):
    """Run every analysis over the submitted spins."""
    data = {} if data is None else data
    try:
        spins = spins_from_payload(data)
        print(f"[analyze] Received {len(spins)} spins")
        if not spins:
            emit('error', {'message': 'No valid numbers (0-36) found in data.'})
            return
        engine = AnalyticsEngine(settings_from_payload(data))
        start = time.time()
        report = engine.run(spins)
    except SettingsError as e:
        print(f"[analyze] Rejected settings: {e}")
        emit('error', {'message': str(e)})
        return
    except Exception as e:
        print(f"[analyze] ERROR: {e}")
        traceback.print_exc()
        emit('error', {'message': f'Analysis failed: {str(e)}'})
        return

    print(f"[analyze] Done in {time.time() - start:.3f}s")
    emit('analysis_complete', report)


@socketio.on('analyze_neighbors')
def handle_analyze_neighbors(data):
    """Re-run the forward neighbour sweep for a newly chosen target."""
    data = {} if data is None else data
    try:
        analyzer, settings, spins = load_neighbor_request(data)
    except SettingsError as e:
        emit('error', {'message': str(e)})
        return

    if not spins:
        emit('error', {'message': 'No spins to analyze.'})
        return

    target = settings['target_number']
    if target is None:
        target = spins[-1]

    emit('neighbors_result', analyzer.analyze_target(target, settings['analysis_window_size']))


@socketio.on('analyze_target_as_neighbor')
def handle_analyze_target_as_neighbor(data):
    """Which centres' neighbourhoods covered the spin after the target."""
    data = {} if data is None else data
    try:
        analyzer, settings, _ = load_neighbor_request(data)
    except SettingsError as e:
        emit('error', {'message': str(e)})
        return

    if settings['target_number'] is None:
        emit('error', {'message': 'A target number is required.'})
        return

    emit('target_as_neighbor_result',
         analyzer.analyze_target_as_neighbor(settings['target_number'], settings['neighbor_radius']))
