"""Event rosters: who is in an event and in what order.

Each participation row carries an integer ``position``. Appends go to
``max(position) + 1``; removals leave gaps; a reorder rewrites every row to
its 0-based index so the sequence is dense again.
"""
from flask import current_app
from sqlalchemy import func
from alliance_manager.app import db
from alliance_manager.models import EventParticipation
from alliance_manager.services.event_catalog import effective_max_players
from alliance_manager.services.payloads import (
    INT_MAX, INT_MIN, clamp_int, clean_text, is_blank, parse_bool, parse_int,
)


class DuplicateParticipationError(ValueError):
    pass


class EventFullError(ValueError):
    pass


class ParticipationNotFound(LookupError):
    pass


class InvalidReorderError(ValueError):
    pass


def ordered_participations(event_id):
    return EventParticipation.query.filter_by(event_id=event_id)\
        .order_by(EventParticipation.position.asc(), EventParticipation.id.asc()).all()


def next_position(event_id):
    current_max = db.session.query(func.max(EventParticipation.position))\
        .filter(EventParticipation.event_id == event_id).scalar()
    return 0 if current_max is None else current_max + 1


def _check_capacity(event, adding):
    cap = effective_max_players(event)
    if not cap or adding <= 0:
        return
    current = EventParticipation.query.filter_by(event_id=event.id).count()
    if current + adding > cap:
        raise EventFullError(f'{event.name} is limited to {cap} players')


def add_participant(event, player_id):
    existing = EventParticipation.query.filter_by(event_id=event.id, player_id=player_id).first()
    if existing:
        raise DuplicateParticipationError('Player is already in this event')
    _check_capacity(event, 1)

    participation = EventParticipation(
        event_id=event.id, player_id=player_id,
        participated=False, position=next_position(event.id),
    )
    db.session.add(participation)
    db.session.commit()
    return participation


def bulk_add_participants(event, player_ids):
    """Append players in input order, skipping anyone already on the roster.

    Returns the newly created participation rows.
    """
    present = {
        row.player_id for row in
        EventParticipation.query.filter_by(event_id=event.id).all()
    }
    to_add = []
    for player_id in player_ids:
        if player_id in present:
            continue
        present.add(player_id)
        to_add.append(player_id)

    _check_capacity(event, len(to_add))

    position = next_position(event.id)
    created = []
    for player_id in to_add:
        participation = EventParticipation(
            event_id=event.id, player_id=player_id,
            participated=False, position=position,
        )
        position += 1
        db.session.add(participation)
        created.append(participation)
    db.session.commit()
    return created


def remove_participant(event_id, player_id):
    """Delete a player's row; remaining positions keep their gaps."""
    removed = EventParticipation.query.filter_by(
        event_id=event_id, player_id=player_id
    ).delete()
    db.session.commit()
    return removed


def reorder_participants(event_id, ordered_ids):
    """Rewrite positions so each participation sits at its index in ``ordered_ids``.

    Rows are updated one by one; an interrupted reorder leaves a partial
    ordering that the next full reorder repairs.
    """
    rows = {row.id: row for row in EventParticipation.query.filter_by(event_id=event_id).all()}
    unknown = [pid for pid in ordered_ids if pid not in rows]
    if unknown:
        raise InvalidReorderError('Participations do not belong to this event: '
                                  + ', '.join(str(pid) for pid in unknown))
    if len(set(ordered_ids)) != len(ordered_ids):
        raise InvalidReorderError('Duplicate participation ids in ordering')

    for index, participation_id in enumerate(ordered_ids):
        rows[participation_id].position = index
        db.session.commit()

    current_app.logger.info('Reordered %s participants for event %s', len(ordered_ids), event_id)
    return ordered_participations(event_id)


def get_participation(participation_id):
    participation = db.session.get(EventParticipation, participation_id)
    if not participation:
        raise ParticipationNotFound('Participation not found')
    return participation


def update_participation(participation_id, data):
    """Apply independent field updates.

    ``score: null`` (or blank) clears the score. An unparseable score leaves
    the stored value alone, and large values are clamped to the column range.
    """
    participation = get_participation(participation_id)
    if 'participated' in data:
        participation.participated = parse_bool(data.get('participated'))
    if 'score' in data:
        raw_score = data.get('score')
        if is_blank(raw_score):
            participation.score = None
        else:
            score = parse_int(raw_score, default=None)
            if score is not None:
                participation.score = clamp_int(score, INT_MIN, INT_MAX)
    if 'notes' in data:
        participation.notes = clean_text(data.get('notes'), 1000) or None
    db.session.commit()
    return participation
