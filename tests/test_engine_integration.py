"""
Integration Tests - AnalyticsEngine end to end, input parsing, settings
validation and the HTTP / SocketIO surfaces.
"""
import json

import numpy as np
import pytest

from config import DEFAULT_COINCIDENCES, PATTERN_MAX_WINDOW_SIZE
from spin_analytics.analysis.engine import AnalyticsEngine, analyze, to_chronological
from spin_analytics.analysis.settings import (
    SettingsError, build_settings, make_coincidence_config, validate_spins,
    validate_custom_numbers, validate_family,
)
from spin_analytics.parsing import (
    parse_numbers, parse_stakes, spins_from_payload, settings_from_payload,
)

from conftest import SAMPLE_SPINS


def _assert_no_numpy(obj, path='root'):
    """Walk a report and fail on any numpy scalar or array."""
    if isinstance(obj, dict):
        for key, value in obj.items():
            assert not isinstance(key, np.generic), f'numpy key at {path}'
            _assert_no_numpy(value, f'{path}.{key}')
    elif isinstance(obj, (list, tuple)):
        for i, value in enumerate(obj):
            _assert_no_numpy(value, f'{path}[{i}]')
    else:
        assert not isinstance(obj, (np.generic, np.ndarray)), f'numpy value at {path}: {type(obj)}'


# ═══════════════════════════════════════════════════════════════
# Settings Validation Tests
# ═══════════════════════════════════════════════════════════════

class TestSettings:
    def test_defaults(self):
        settings = build_settings()
        assert settings['chronological'] is True
        assert settings['target_number'] is None
        assert len(settings['coincidence_configs']) == len(DEFAULT_COINCIDENCES)
        assert settings['coincidence_configs'][0].trigger == 4

    def test_unknown_key_rejected(self):
        with pytest.raises(SettingsError):
            build_settings({'bankrol': 100})

    def test_inverted_range_rejected(self):
        with pytest.raises(SettingsError):
            make_coincidence_config({'trigger': 4, 'window': 10,
                                     'target_range_start': 29, 'target_range_end': 25})

    def test_generated_config_id(self):
        config = make_coincidence_config({'trigger': 4, 'window': 10,
                                          'target_range_start': 25, 'target_range_end': 29})
        assert config.id == '4->25-29/10'

    @pytest.mark.parametrize('overrides', [
        {'bankroll': 0},
        {'bankroll': -5},
        {'stake_ladder': []},
        {'stake_ladder': [1, 0]},
        {'analysis_window_size': 0},
        {'neighbor_radius': 1.5},
        {'pattern_window_size': PATTERN_MAX_WINDOW_SIZE + 1},
        {'target_number': 37},
        {'custom_numbers': [5, 40]},
        {'coincidence_configs': [{'trigger': 40, 'window': 3,
                                  'target_range_start': 1, 'target_range_end': 2}]},
        {'chronological': 'false'},
        {'chronological': 0},
        {'stake_ladder': 5},
        {'custom_numbers': 7},
        {'coincidence_configs': {'trigger': 4}},
    ])
    def test_invalid_settings(self, overrides):
        with pytest.raises(SettingsError):
            build_settings(overrides)

    def test_settings_must_be_mapping(self):
        with pytest.raises(SettingsError):
            build_settings([('bankroll', 100)])

    def test_chronological_flag_respected(self):
        assert analyze([1, 2, 3], {'chronological': False})['spins'] == [3, 2, 1]

    def test_invalid_spins(self):
        with pytest.raises(SettingsError):
            validate_spins([1, 2, 37])
        with pytest.raises(SettingsError):
            validate_spins([1, True])

    def test_custom_numbers_deduplicated(self):
        assert validate_custom_numbers([7, 17, 7, 0]) == [7, 17, 0]

    def test_family(self):
        assert validate_family('squares') == 'squares'
        with pytest.raises(SettingsError):
            validate_family('sectors')

    def test_settings_error_is_value_error(self):
        assert issubclass(SettingsError, ValueError)


# ═══════════════════════════════════════════════════════════════
# Input Parsing Tests
# ═══════════════════════════════════════════════════════════════

class TestParsing:
    def test_parse_numbers(self):
        assert parse_numbers("1, 2 abc 40 -1 36\n0") == [1, 2, 36, 0]

    def test_parse_numbers_semicolons(self):
        assert parse_numbers("5;6;;7") == [5, 6, 7]

    def test_parse_empty(self):
        assert parse_numbers('') == []
        assert parse_numbers(None) == []

    def test_parse_stakes(self):
        assert parse_stakes("3, 5, x, -2, 2.5") == [3, 5, 2.5]

    def test_settings_from_payload_parses_text(self):
        settings = settings_from_payload({'settings': {'stake_ladder': '1 2 4',
                                                       'custom_numbers': '7,17'}})
        assert settings == {'stake_ladder': [1, 2, 4], 'custom_numbers': [7, 17]}

    @pytest.mark.parametrize('payload', [
        [1, 2, 3],
        '1 2 3',
        {'spins': 5},
        {'spins': '1 2 3'},
        {'text': 12},
    ])
    def test_malformed_spin_payload(self, payload):
        with pytest.raises(SettingsError):
            spins_from_payload(payload)

    @pytest.mark.parametrize('payload', [
        [1, 2, 3],
        {'settings': [1, 2]},
        {'settings': 'bankroll=100'},
    ])
    def test_malformed_settings_payload(self, payload):
        with pytest.raises(SettingsError):
            settings_from_payload(payload)

    def test_empty_payload(self):
        assert spins_from_payload({}) == []
        assert settings_from_payload({}) == {}


# ═══════════════════════════════════════════════════════════════
# AnalyticsEngine Tests
# ═══════════════════════════════════════════════════════════════

class TestAnalyticsEngine:
    def test_full_report_sections(self):
        report = analyze(SAMPLE_SPINS)
        for key in ('total_spins', 'spins', 'target_number', 'gaps', 'neighbors',
                    'coincidences', 'patterns', 'betting', 'elapsed_seconds'):
            assert key in report
        assert report['total_spins'] == len(SAMPLE_SPINS)
        assert set(report['betting']) == {'sequences', 'squares', 'custom'}

    def test_report_is_json_serializable(self):
        report = analyze(SAMPLE_SPINS, {'custom_numbers': [0, 32, 15]})
        _assert_no_numpy(report)
        json.dumps(report)

    def test_default_target_is_last_spin(self):
        engine = AnalyticsEngine()
        report = engine.run([5, 9, 14])
        assert report['target_number'] == 14
        assert report['neighbors']['target']['target_number'] == 14

    def test_configured_target(self):
        report = analyze([5, 9, 14], {'target_number': 0})
        assert report['target_number'] == 0
        assert report['neighbors']['target_as_neighbor']['target'] == 0

    def test_empty_history(self):
        report = analyze([])
        assert report['total_spins'] == 0
        assert report['target_number'] == 0
        assert report['patterns']['top_pairs'] == []
        assert report['betting']['sequences']['final_balance'] == report['betting']['sequences']['initial_bankroll']
        for stats in report['gaps']['sequences']['classes'].values():
            assert stats['hits'] == 0
            assert stats['percentage'] == 0.0

    def test_newest_first_input_reversed(self):
        forward = analyze([1, 2, 3])
        backward = analyze([3, 2, 1], {'chronological': False})
        assert backward['spins'] == [1, 2, 3]
        assert backward['gaps'] == forward['gaps']
        assert backward['target_number'] == 3

    def test_to_chronological_copies(self):
        spins = [1, 2, 3]
        assert to_chronological(spins, False) == [3, 2, 1]
        assert spins == [1, 2, 3]

    def test_invalid_spin_rejected(self):
        with pytest.raises(SettingsError):
            analyze([1, 2, 99])

    def test_idempotent(self):
        engine = AnalyticsEngine()
        first = engine.run(SAMPLE_SPINS)
        second = engine.run()
        first.pop('elapsed_seconds')
        second.pop('elapsed_seconds')
        assert first == second

    def test_betting_uses_settings(self):
        report = analyze([3, 1, 1, 2], {'bankroll': 100, 'stake_ladder': [1, 2, 4]})
        assert report['betting']['sequences']['final_balance'] == 107


# ═══════════════════════════════════════════════════════════════
# HTTP API Tests
# ═══════════════════════════════════════════════════════════════

@pytest.fixture(scope="module")
def app():
    from spin_analytics import create_app
    flask_app = create_app()
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


class TestHttpApi:
    def test_health(self, client):
        resp = client.get('/health')
        assert resp.status_code == 200
        assert resp.get_json()['status'] == 'ok'

    def test_defaults(self, client):
        data = client.get('/api/defaults').get_json()
        assert data['coincidence_configs'] == DEFAULT_COINCIDENCES
        assert data['neighbor_radius'] == 3

    def test_analyze_text(self, client):
        resp = client.post('/api/analyze', json={'text': '1 2 3 4 5'})
        assert resp.status_code == 200
        body = resp.get_json()
        assert body['total_spins'] == 5
        assert body['spins'] == [1, 2, 3, 4, 5]

    def test_analyze_no_spins(self, client):
        resp = client.post('/api/analyze', json={'text': 'nothing here'})
        assert resp.status_code == 400
        assert 'error' in resp.get_json()

    def test_analyze_bad_settings(self, client):
        resp = client.post('/api/analyze', json={'spins': [1, 2], 'settings': {'bankroll': -1}})
        assert resp.status_code == 400

    @pytest.mark.parametrize('body', [
        [1, 2, 3],
        {'spins': 5},
        {'spins': [1, 2], 'settings': [1]},
        {'spins': [1, 2], 'settings': {'chronological': 'false'}},
        {'spins': [1, 2], 'settings': {'stake_ladder': 5}},
    ])
    def test_analyze_malformed_body(self, client, body):
        resp = client.post('/api/analyze', json=body)
        assert resp.status_code == 400
        assert 'error' in resp.get_json()

    def test_neighbors_malformed_body(self, client):
        assert client.post('/api/neighbors', json=[0, 32]).status_code == 400
        assert client.post('/api/target-as-neighbor', json={'spins': 0}).status_code == 400

    def test_neighbors(self, client):
        resp = client.post('/api/neighbors', json={
            'spins': [0, 32, 0, 10, 0],
            'settings': {'target_number': 0, 'analysis_window_size': 1},
        })
        assert resp.status_code == 200
        body = resp.get_json()
        assert body['valid_occurrences'] == 2
        assert body['best_k'] == 2

    def test_neighbors_requires_target(self, client):
        resp = client.post('/api/neighbors', json={'spins': [1, 2]})
        assert resp.status_code == 400

    def test_target_as_neighbor(self, client):
        resp = client.post('/api/target-as-neighbor', json={
            'spins': [0, 15, 0, 15, 0, 26],
            'settings': {'target_number': 0, 'neighbor_radius': 1},
        })
        body = resp.get_json()
        assert [c['center'] for c in body['centers']] == [32, 0, 26]


# ═══════════════════════════════════════════════════════════════
# SocketIO Event Tests
# ═══════════════════════════════════════════════════════════════

def _events(sio_client, name):
    return [msg['args'][0] for msg in sio_client.get_received() if msg['name'] == name]


class TestSocketEvents:
    def test_connect_sends_defaults(self, app):
        from spin_analytics import socketio
        sio_client = socketio.test_client(app)
        connected = _events(sio_client, 'connected')
        assert len(connected) == 1
        assert connected[0]['defaults']['bankroll'] == 500.0

    def test_analyze_event(self, app):
        from spin_analytics import socketio
        sio_client = socketio.test_client(app)
        sio_client.get_received()
        sio_client.emit('analyze', {'spins': SAMPLE_SPINS})
        results = _events(sio_client, 'analysis_complete')
        assert len(results) == 1
        assert results[0]['total_spins'] == len(SAMPLE_SPINS)

    def test_analyze_event_error(self, app):
        from spin_analytics import socketio
        sio_client = socketio.test_client(app)
        sio_client.get_received()
        sio_client.emit('analyze', {'text': ''})
        errors = _events(sio_client, 'error')
        assert len(errors) == 1
        assert 'No valid numbers' in errors[0]['message']

    def test_neighbors_event_defaults_to_last_spin(self, app):
        from spin_analytics import socketio
        sio_client = socketio.test_client(app)
        sio_client.get_received()
        sio_client.emit('analyze_neighbors', {'spins': [3, 0, 32, 0]})
        results = _events(sio_client, 'neighbors_result')
        assert results[0]['target_number'] == 0

    def test_target_as_neighbor_event_requires_target(self, app):
        from spin_analytics import socketio
        sio_client = socketio.test_client(app)
        sio_client.get_received()
        sio_client.emit('analyze_target_as_neighbor', {'spins': [1, 2]})
        assert len(_events(sio_client, 'error')) == 1

    @pytest.mark.parametrize('payload', [[1, 2, 3], {'spins': 5}, {'spins': [1], 'settings': 'x'}])
    def test_analyze_event_malformed_payload(self, app, payload):
        from spin_analytics import socketio
        sio_client = socketio.test_client(app)
        sio_client.get_received()
        sio_client.emit('analyze', payload)
        received = sio_client.get_received()
        assert [msg['name'] for msg in received] == ['error']

    def test_neighbors_event_malformed_payload(self, app):
        from spin_analytics import socketio
        sio_client = socketio.test_client(app)
        sio_client.get_received()
        sio_client.emit('analyze_neighbors', {'spins': 3})
        assert len(_events(sio_client, 'error')) == 1
