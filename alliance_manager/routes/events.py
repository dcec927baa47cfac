"""Events, their status lifecycle and ordered participant rosters."""
from flask import Blueprint, request, jsonify
from alliance_manager.app import db
from alliance_manager.models import Event, Player
from alliance_manager.services import participation as roster
from alliance_manager.services.event_catalog import (
    EVENT_STATUSES, EVENT_TYPES, can_transition, normalize_event_payload,
)
from alliance_manager.services.participation import (
    DuplicateParticipationError, EventFullError, InvalidReorderError, ParticipationNotFound,
)
from alliance_manager.services.realtime import emit_event_update

events_bp = Blueprint('events', __name__)


def _normalize_int_id_list(raw_ids):
    """Coerce a JSON list of ids to positive ints.

    Returns None when the payload is not a list or any entry is not an id.
    """
    if not isinstance(raw_ids, list):
        return None
    normalized = []
    for raw in raw_ids:
        if isinstance(raw, bool):
            return None
        try:
            item_id = int(raw)
        except (TypeError, ValueError):
            return None
        if item_id <= 0:
            return None
        normalized.append(item_id)
    return normalized


def _event_detail(event):
    data = event.to_dict()
    data['participations'] = [
        p.to_dict(include_player=True) for p in roster.ordered_participations(event.id)
    ]
    return data


@events_bp.errorhandler(ParticipationNotFound)
def _handle_missing_participation(error):
    return jsonify({'error': str(error)}), 404


@events_bp.route('/types', methods=['GET'])
def get_event_types():
    return jsonify({'types': EVENT_TYPES, 'statuses': list(EVENT_STATUSES)})


@events_bp.route('', methods=['GET'])
def get_events():
    """List events newest first, optionally filtered by status."""
    status = (request.args.get('status') or '').strip().upper()
    query = Event.query
    if status:
        if status not in EVENT_STATUSES:
            return jsonify({'error': 'Invalid status filter'}), 400
        query = query.filter_by(status=status)
    events = query.order_by(Event.start_date.desc(), Event.id.desc()).all()
    return jsonify({'events': [e.to_dict() for e in events]})


@events_bp.route('/<int:event_id>', methods=['GET'])
def get_event(event_id):
    event = db.session.get(Event, event_id)
    if not event:
        return jsonify({'error': 'Event not found'}), 404
    return jsonify({'event': _event_detail(event)})


@events_bp.route('', methods=['POST'])
def create_event():
    fields, errors = normalize_event_payload(request.get_json(silent=True))
    if errors:
        return jsonify({'error': '; '.join(errors)}), 400

    event = Event(**fields)
    db.session.add(event)
    db.session.commit()
    emit_event_update(event.id, reason='event_created')
    return jsonify({'event': event.to_dict()}), 201


@events_bp.route('/<int:event_id>', methods=['PUT', 'PATCH'])
def update_event(event_id):
    event = db.session.get(Event, event_id)
    if not event:
        return jsonify({'error': 'Event not found'}), 404

    fields, errors = normalize_event_payload(request.get_json(silent=True), partial=True)
    if errors:
        return jsonify({'error': '; '.join(errors)}), 400
    if 'status' in fields and not can_transition(event.status, fields['status']):
        return jsonify({
            'error': f'Cannot move event from {event.status} back to {fields["status"]}'
        }), 400

    start = fields.get('start_date', event.start_date)
    end = fields.get('end_date', event.end_date)
    if start and end and end < start:
        return jsonify({'error': 'end_date cannot be before start_date'}), 400

    for field, value in fields.items():
        setattr(event, field, value)
    db.session.commit()
    emit_event_update(event.id, reason='event_updated')
    return jsonify({'event': event.to_dict()})


@events_bp.route('/<int:event_id>', methods=['DELETE'])
def delete_event(event_id):
    event = db.session.get(Event, event_id)
    if not event:
        return jsonify({'error': 'Event not found'}), 404

    db.session.delete(event)
    db.session.commit()
    emit_event_update(event_id, reason='event_deleted')
    return jsonify({'message': 'Event deleted'})


# ── Participants ──────────────────────────────────────────────────────

@events_bp.route('/<int:event_id>/participants', methods=['POST'])
def add_participant(event_id):
    event = db.session.get(Event, event_id)
    if not event:
        return jsonify({'error': 'Event not found'}), 404

    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Invalid JSON payload'}), 400
    try:
        player_id = int(data.get('player_id'))
    except (TypeError, ValueError):
        return jsonify({'error': 'player_id is required'}), 400
    if not db.session.get(Player, player_id):
        return jsonify({'error': 'Player not found'}), 404

    try:
        participation = roster.add_participant(event, player_id)
    except DuplicateParticipationError as exc:
        return jsonify({'error': str(exc)}), 409
    except EventFullError as exc:
        return jsonify({'error': str(exc)}), 400

    emit_event_update(event.id, reason='participant_added')
    return jsonify({'participation': participation.to_dict(include_player=True)}), 201


@events_bp.route('/<int:event_id>/participants/bulk', methods=['POST'])
def bulk_add_participants(event_id):
    event = db.session.get(Event, event_id)
    if not event:
        return jsonify({'error': 'Event not found'}), 404

    data = request.get_json(silent=True) or {}
    player_ids = _normalize_int_id_list(data.get('player_ids') if isinstance(data, dict) else None)
    if player_ids is None:
        return jsonify({'error': 'player_ids must be a list of integer ids'}), 400

    known = {p.id for p in Player.query.filter(Player.id.in_(player_ids)).all()} if player_ids else set()
    missing = [pid for pid in player_ids if pid not in known]
    if missing:
        return jsonify({'error': 'Players not found: ' + ', '.join(str(pid) for pid in missing)}), 404

    try:
        created = roster.bulk_add_participants(event, player_ids)
    except EventFullError as exc:
        return jsonify({'error': str(exc)}), 400

    if created:
        emit_event_update(event.id, reason='participants_added')
    return jsonify({
        'message': f'Added {len(created)} player(s)',
        'added_count': len(created),
        'event': _event_detail(event),
    })


@events_bp.route('/<int:event_id>/participants/<int:player_id>', methods=['DELETE'])
def remove_participant(event_id, player_id):
    if not db.session.get(Event, event_id):
        return jsonify({'error': 'Event not found'}), 404

    removed = roster.remove_participant(event_id, player_id)
    if not removed:
        return jsonify({'error': 'Player is not in this event'}), 404
    emit_event_update(event_id, reason='participant_removed')
    return jsonify({'message': 'Participant removed'})


@events_bp.route('/<int:event_id>/participants/order', methods=['PUT'])
def reorder_participants(event_id):
    """Rewrite roster positions from a full, permuted list of participation ids."""
    event = db.session.get(Event, event_id)
    if not event:
        return jsonify({'error': 'Event not found'}), 404

    data = request.get_json(silent=True) or {}
    ordered_ids = _normalize_int_id_list(data.get('ordered_ids') if isinstance(data, dict) else None)
    if ordered_ids is None:
        return jsonify({'error': 'ordered_ids must be a list of integer ids'}), 400

    try:
        rows = roster.reorder_participants(event.id, ordered_ids)
    except InvalidReorderError as exc:
        return jsonify({'error': str(exc)}), 400

    emit_event_update(event.id, reason='participants_reordered')
    return jsonify({'participations': [p.to_dict(include_player=True) for p in rows]})


@events_bp.route('/participations/<int:participation_id>', methods=['PATCH'])
def update_participation(participation_id):
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Invalid JSON payload'}), 400

    participation = roster.update_participation(participation_id, data)
    emit_event_update(participation.event_id, reason='participation_updated')
    return jsonify({'participation': participation.to_dict()})
