"""
Input parsing — turns pasted text and request payloads into engine inputs.
"""

import re

from config import TOTAL_NUMBERS
from spin_analytics.analysis.engine import to_chronological
from spin_analytics.analysis.neighbor_analyzer import NeighborAnalyzer
from spin_analytics.analysis.settings import SettingsError, build_settings, validate_spins

_SEPARATORS = re.compile(r'[,;\s]+')


def parse_numbers(raw_text):
    """Parse roulette numbers from text (comma, semicolon or whitespace separated).

    Non-numeric tokens and values outside 0-36 are dropped.
    """
    numbers = []
    for token in _SEPARATORS.split(raw_text or ''):
        if not token:
            continue
        try:
            num = int(token)
        except ValueError:
            continue
        if 0 <= num < TOTAL_NUMBERS:
            numbers.append(num)
    return numbers


def parse_stakes(raw_text):
    """Parse a stake ladder such as '3, 5, 8, 13'; non-positive values are dropped."""
    stakes = []
    for token in _SEPARATORS.split(raw_text or ''):
        if not token:
            continue
        try:
            value = float(token)
        except ValueError:
            continue
        if value > 0:
            stakes.append(int(value) if value.is_integer() else value)
    return stakes


def spins_from_payload(data):
    """Spins from a request payload: either a 'spins' list or raw 'text'.

    Raises SettingsError when the payload or either field has the wrong shape.
    """
    if not isinstance(data, dict):
        raise SettingsError('Request body must be a JSON object')
    if data.get('spins') is not None:
        if not isinstance(data['spins'], list):
            raise SettingsError(f"'spins' must be a list, got {type(data['spins']).__name__}")
        return list(data['spins'])
    text = data.get('text') or ''
    if not isinstance(text, str):
        raise SettingsError(f"'text' must be a string, got {type(text).__name__}")
    return parse_numbers(text)


def settings_from_payload(data):
    """Settings overrides from a request payload.

    A text 'stake_ladder' is parsed the same way the stake input box is.
    """
    if not isinstance(data, dict):
        raise SettingsError('Request body must be a JSON object')
    raw = data.get('settings') or {}
    if not isinstance(raw, dict):
        raise SettingsError(f"'settings' must be an object, got {type(raw).__name__}")
    settings = dict(raw)
    if isinstance(settings.get('stake_ladder'), str):
        settings['stake_ladder'] = parse_stakes(settings['stake_ladder'])
    if isinstance(settings.get('custom_numbers'), str):
        settings['custom_numbers'] = parse_numbers(settings['custom_numbers'])
    return settings


def load_neighbor_request(data):
    """Validate a neighbour query payload.

    Returns (analyzer loaded with the chronological spins, settings, spins).
    Raises SettingsError on bad spins or settings.
    """
    settings = build_settings(settings_from_payload(data))
    spins = to_chronological(validate_spins(spins_from_payload(data)), settings['chronological'])
    analyzer = NeighborAnalyzer()
    analyzer.load_history(spins)
    return analyzer, settings, spins
