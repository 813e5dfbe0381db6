"""
HTTP Routes - JSON API over the analytics engine.
"""

from flask import Blueprint, jsonify, request

from config import (
    DEFAULT_STAKE_LADDER, DEFAULT_COINCIDENCES, INITIAL_BANKROLL,
    NEIGHBOR_WINDOW_SIZE, NEIGHBOR_RADIUS,
)
from spin_analytics.analysis.engine import AnalyticsEngine
from spin_analytics.analysis.settings import SettingsError
from spin_analytics.parsing import spins_from_payload, settings_from_payload, load_neighbor_request

main_bp = Blueprint('main', __name__)


def _bad_request(message):
    return jsonify({'error': message}), 400


def _json_body():
    """Parsed JSON body; None stays an empty payload, other shapes are left to the parsers."""
    data = request.get_json(silent=True)
    return {} if data is None else data


@main_bp.route('/health')
def health():
    return jsonify({'status': 'ok', 'service': 'Roulette Spin Analytics'})


@main_bp.route('/api/defaults')
def defaults():
    return jsonify({
        'bankroll': INITIAL_BANKROLL,
        'stake_ladder': DEFAULT_STAKE_LADDER,
        'coincidence_configs': DEFAULT_COINCIDENCES,
        'analysis_window_size': NEIGHBOR_WINDOW_SIZE,
        'neighbor_radius': NEIGHBOR_RADIUS,
    })


@main_bp.route('/api/analyze', methods=['POST'])
def analyze():
    data = _json_body()
    try:
        spins = spins_from_payload(data)
        if not spins:
            return _bad_request('No valid numbers (0-36) found in data.')
        engine = AnalyticsEngine(settings_from_payload(data))
        report = engine.run(spins)
    except SettingsError as e:
        return _bad_request(str(e))

    return jsonify(report)


@main_bp.route('/api/neighbors', methods=['POST'])
def neighbors():
    data = _json_body()
    try:
        analyzer, settings, _ = load_neighbor_request(data)
    except SettingsError as e:
        return _bad_request(str(e))

    if settings['target_number'] is None:
        return _bad_request('target_number is required.')
    return jsonify(analyzer.analyze_target(settings['target_number'],
                                           settings['analysis_window_size']))


@main_bp.route('/api/target-as-neighbor', methods=['POST'])
def target_as_neighbor():
    data = _json_body()
    try:
        analyzer, settings, _ = load_neighbor_request(data)
    except SettingsError as e:
        return _bad_request(str(e))

    if settings['target_number'] is None:
        return _bad_request('target_number is required.')
    return jsonify(analyzer.analyze_target_as_neighbor(settings['target_number'],
                                                       settings['neighbor_radius']))
