"""Event types, status lifecycle and event payload normalization."""
from alliance_manager.services.payloads import EVENT_WRITABLE_FIELDS, INT_MAX, clean_text, parse_optional_int
from alliance_manager.time_utils import parse_iso_datetime

# max_players None means the event type has no roster cap.
EVENT_TYPES = {
    'ARK_OF_OSIRIS': {'name': 'Ark of Osiris', 'max_players': 30},
    'KVK': {'name': 'Kingdom vs Kingdom', 'max_players': None},
    'MGE': {'name': 'Mightiest Governor Event', 'max_players': None},
    'CEROLI_CRISIS': {'name': 'Ceroli Crisis', 'max_players': None},
    'IANS_BALLADS': {'name': "Ian's Ballads", 'max_players': None},
    'SUNSET_CANYON': {'name': 'Sunset Canyon', 'max_players': 5},
    'LOST_KINGDOM': {'name': 'Lost Kingdom', 'max_players': None},
    'GOLDEN_KINGDOM': {'name': 'Golden Kingdom', 'max_players': None},
}

EVENT_STATUSES = ('UPCOMING', 'ACTIVE', 'COMPLETED')
EVENT_STATUS_LABELS = {
    'UPCOMING': 'Upcoming',
    'ACTIVE': 'Active',
    'COMPLETED': 'Completed',
}
DEFAULT_EVENT_STATUS = 'UPCOMING'


def type_max_players(event_type):
    info = EVENT_TYPES.get(event_type)
    if not info:
        return None
    return info['max_players']


def effective_max_players(event):
    """Roster cap for an event: explicit override first, then the type's cap."""
    if event.max_players:
        return event.max_players
    return type_max_players(event.type)


def can_transition(current_status, new_status):
    """Statuses only move forward: UPCOMING -> ACTIVE -> COMPLETED."""
    if new_status not in EVENT_STATUSES:
        return False
    if current_status not in EVENT_STATUSES:
        return True
    return EVENT_STATUSES.index(new_status) >= EVENT_STATUSES.index(current_status)


def normalize_event_payload(raw_data, partial=False):
    """Return ``(fields, errors)`` for an event create/update payload."""
    if not isinstance(raw_data, dict):
        return None, ['Invalid payload']

    errors = []
    fields = {}
    for field in EVENT_WRITABLE_FIELDS:
        if partial and field not in raw_data:
            continue
        value = raw_data.get(field)

        if field == 'name':
            name = clean_text(value, 200)
            if name:
                fields['name'] = name
            else:
                errors.append('name is required')
        elif field == 'type':
            event_type = clean_text(value, 40).upper()
            if event_type in EVENT_TYPES:
                fields['type'] = event_type
            else:
                allowed = ', '.join(EVENT_TYPES)
                errors.append(f'type must be one of: {allowed}')
        elif field == 'status':
            if value is None and not partial:
                fields['status'] = DEFAULT_EVENT_STATUS
                continue
            status = clean_text(value, 20).upper()
            if status in EVENT_STATUSES:
                fields['status'] = status
            else:
                errors.append('status must be one of: ' + ', '.join(EVENT_STATUSES))
        elif field == 'start_date':
            start = parse_iso_datetime(value)
            if start:
                fields['start_date'] = start
            else:
                errors.append('start_date must be an ISO date')
        elif field == 'end_date':
            if value in (None, ''):
                fields['end_date'] = None
                continue
            end = parse_iso_datetime(value)
            if end:
                fields['end_date'] = end
            else:
                errors.append('end_date must be an ISO date')
        elif field == 'max_players':
            max_players = parse_optional_int(value)
            if max_players and max_players > 0:
                fields['max_players'] = min(max_players, INT_MAX)
            else:
                fields['max_players'] = None
        elif field == 'description':
            fields['description'] = clean_text(value, 3000) or None

    # A typed cap wins on create and whenever an update changes the type.
    if 'type' in fields:
        typed_cap = type_max_players(fields['type'])
        if typed_cap:
            fields['max_players'] = typed_cap

    start = fields.get('start_date')
    end = fields.get('end_date')
    if start and end and end < start:
        errors.append('end_date cannot be before start_date')

    return fields, errors
