"""
Analysis settings — validated once at the boundary, before any scan runs.

Bad settings are a caller error and fail fast with SettingsError. The
analyzers themselves assume their inputs already passed through here.
"""

from collections import namedtuple

from config import (
    TOTAL_NUMBERS, INITIAL_BANKROLL, DEFAULT_STAKE_LADDER, DEFAULT_COINCIDENCES,
    NEIGHBOR_WINDOW_SIZE, NEIGHBOR_RADIUS, RECENT_SPINS_COUNT,
    PATTERN_WINDOW_SIZE, PATTERN_MAX_WINDOW_SIZE, PATTERN_MIN_OCCURRENCES,
    BETTING_FAMILIES,
)


class SettingsError(ValueError):
    """Raised when analysis settings violate their constraints."""


CoincidenceConfig = namedtuple(
    'CoincidenceConfig',
    ['id', 'trigger', 'window', 'target_range_start', 'target_range_end'],
)


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_pocket(name, value):
    if not _is_int(value) or not 0 <= value < TOTAL_NUMBERS:
        raise SettingsError(f'{name} must be an integer between 0 and {TOTAL_NUMBERS - 1}, got {value!r}')
    return value


def _check_positive_int(name, value):
    if not _is_int(value) or value < 1:
        raise SettingsError(f'{name} must be a positive integer, got {value!r}')
    return value


def validate_spins(spins):
    """Return the spins as a list, rejecting anything outside 0-36."""
    spins = list(spins)
    for i, n in enumerate(spins):
        if not _is_int(n) or not 0 <= n < TOTAL_NUMBERS:
            raise SettingsError(f'Spin #{i + 1} is not a pocket number (0-36): {n!r}')
    return spins


def make_coincidence_config(raw):
    """Build a CoincidenceConfig from a dict (or pass one through), validating it."""
    if isinstance(raw, CoincidenceConfig):
        fields = raw._asdict()
    elif isinstance(raw, dict):
        fields = raw
    else:
        raise SettingsError(f'Coincidence config must be a mapping, got {type(raw).__name__}')

    missing = [f for f in CoincidenceConfig._fields if f != 'id' and f not in fields]
    if missing:
        raise SettingsError(f'Coincidence config is missing {", ".join(missing)}')

    trigger = _check_pocket('trigger', fields['trigger'])
    window = _check_positive_int('window', fields['window'])
    start = _check_pocket('target_range_start', fields['target_range_start'])
    end = _check_pocket('target_range_end', fields['target_range_end'])
    if start > end:
        raise SettingsError(f'target_range_start ({start}) is greater than target_range_end ({end})')

    config_id = fields.get('id') or f'{trigger}->{start}-{end}/{window}'
    return CoincidenceConfig(str(config_id), trigger, window, start, end)


def _check_list(name, value):
    if not isinstance(value, (list, tuple)):
        raise SettingsError(f'{name} must be a list, got {type(value).__name__}')
    return list(value)


def validate_coincidences(configs):
    configs = _check_list('coincidence_configs', configs)
    return [make_coincidence_config(c) for c in configs]


def validate_stake_ladder(ladder):
    ladder = _check_list('stake_ladder', ladder)
    if not ladder:
        raise SettingsError('Stake ladder must contain at least one stake')
    for stake in ladder:
        if not _is_number(stake) or stake <= 0:
            raise SettingsError(f'Stakes must be positive numbers, got {stake!r}')
    return ladder


def validate_bankroll(bankroll):
    if not _is_number(bankroll) or bankroll <= 0:
        raise SettingsError(f'Bankroll must be a positive number, got {bankroll!r}')
    return bankroll


def validate_custom_numbers(numbers):
    """Distinct pocket numbers, in first-seen order."""
    result = []
    for n in _check_list('custom_numbers', numbers):
        _check_pocket('custom number', n)
        if n not in result:
            result.append(n)
    return result


def validate_family(family):
    if family not in BETTING_FAMILIES:
        raise SettingsError(f'Betting family must be one of {", ".join(BETTING_FAMILIES)}, got {family!r}')
    return family


def build_settings(overrides=None):
    """Merge caller overrides onto the defaults and validate every field.

    Returns a plain dict; unknown keys are rejected so typos surface early.
    """
    settings = {
        'chronological': True,
        'bankroll': INITIAL_BANKROLL,
        'stake_ladder': list(DEFAULT_STAKE_LADDER),
        'coincidence_configs': list(DEFAULT_COINCIDENCES),
        'recent_window_count': RECENT_SPINS_COUNT,
        'analysis_window_size': NEIGHBOR_WINDOW_SIZE,
        'neighbor_radius': NEIGHBOR_RADIUS,
        'pattern_window_size': PATTERN_WINDOW_SIZE,
        'min_occurrences': PATTERN_MIN_OCCURRENCES,
        'target_number': None,
        'custom_numbers': [],
    }

    if overrides is not None and not isinstance(overrides, dict):
        raise SettingsError(f'Settings must be a mapping, got {type(overrides).__name__}')
    overrides = dict(overrides or {})
    unknown = sorted(set(overrides) - set(settings))
    if unknown:
        raise SettingsError(f'Unknown settings: {", ".join(unknown)}')
    settings.update(overrides)

    if not isinstance(settings['chronological'], bool):
        raise SettingsError(f"chronological must be true or false, got {settings['chronological']!r}")
    settings['bankroll'] = validate_bankroll(settings['bankroll'])
    settings['stake_ladder'] = validate_stake_ladder(settings['stake_ladder'])
    settings['coincidence_configs'] = validate_coincidences(settings['coincidence_configs'])
    for key in ('recent_window_count', 'analysis_window_size', 'neighbor_radius',
                'pattern_window_size', 'min_occurrences'):
        _check_positive_int(key, settings[key])
    if settings['pattern_window_size'] > PATTERN_MAX_WINDOW_SIZE:
        raise SettingsError(
            f'pattern_window_size must be at most {PATTERN_MAX_WINDOW_SIZE}, '
            f'got {settings["pattern_window_size"]}')
    if settings['target_number'] is not None:
        _check_pocket('target_number', settings['target_number'])
    settings['custom_numbers'] = validate_custom_numbers(settings['custom_numbers'])

    return settings
