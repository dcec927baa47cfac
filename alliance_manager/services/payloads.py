"""Shared payload helpers for creating and updating Player and Event records.

Malformed numbers coming from forms are coerced to a default instead of
being rejected.
"""

_BOOL_TRUE = {'true', '1', 'yes', 'on'}
_BOOL_FALSE = {'false', '0', 'no', 'off'}

EVENT_WRITABLE_FIELDS = [
    'name', 'type', 'max_players', 'start_date', 'end_date', 'status', 'description',
]

BIGINT_MAX = 2 ** 63 - 1
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

_STRING_LIMITS = {
    'player_id': 64,
    'name': 120,
}


def clean_text(value, max_len):
    if value is None:
        return ''
    text = str(value).strip()
    if len(text) > max_len:
        return text[:max_len]
    return text


def parse_int(value, default=0):
    """Parse an int from form/JSON input, falling back to ``default``."""
    if value is None or value == '' or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        # Form fields like "1.5e6" or "1200.0"
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def parse_optional_int(value):
    """Like parse_int but keeps an explicit empty value as None."""
    if is_blank(value):
        return None
    return parse_int(value, default=None)


def clamp_int(value, low, high):
    if value is None:
        return None
    return max(low, min(value, high))


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def parse_bool(value, default=False):
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in _BOOL_TRUE:
        return True
    if text in _BOOL_FALSE:
        return False
    return default


def normalize_player_payload(raw_data, partial=False):
    """Return ``(fields, errors)`` for a player create/update payload."""
    if not isinstance(raw_data, dict):
        return None, ['Invalid payload']

    errors = []
    fields = {}

    if 'player_id' in raw_data or not partial:
        player_id = clean_text(raw_data.get('player_id'), _STRING_LIMITS['player_id'])
        if player_id:
            fields['player_id'] = player_id
        elif not partial:
            errors.append('player_id is required')

    if 'name' in raw_data or not partial:
        name = clean_text(raw_data.get('name'), _STRING_LIMITS['name'])
        if name:
            fields['name'] = name
        elif not partial:
            errors.append('name is required')

    for field in ('power', 'kill_points'):
        if field in raw_data or not partial:
            fields[field] = clamp_int(parse_int(raw_data.get(field), default=0), 0, BIGINT_MAX)

    if 'in_alliance' in raw_data or not partial:
        fields['in_alliance'] = parse_bool(raw_data.get('in_alliance'), default=False)

    return fields, errors
