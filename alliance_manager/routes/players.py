"""Player pool and alliance roster."""
from flask import Blueprint, request, jsonify, current_app
from sqlalchemy import or_
from alliance_manager.app import db
from alliance_manager.models import Player, EventParticipation, Event
from alliance_manager.services.payloads import normalize_player_payload, parse_bool
from alliance_manager.services.realtime import emit_player_update

players_bp = Blueprint('players', __name__)


def _player_id_taken(player_id, exclude_id=None):
    query = Player.query.filter(Player.player_id == player_id)
    if exclude_id is not None:
        query = query.filter(Player.id != exclude_id)
    return query.first() is not None


@players_bp.route('', methods=['GET'])
def get_players():
    """List players by power, optionally filtered by alliance membership or a search term."""
    query = Player.query
    in_alliance = request.args.get('in_alliance')
    if in_alliance is not None and in_alliance != '':
        query = query.filter(Player.in_alliance == parse_bool(in_alliance))

    search = (request.args.get('q') or '').strip()
    if search:
        pattern = f'%{search}%'
        query = query.filter(or_(Player.name.ilike(pattern), Player.player_id.ilike(pattern)))

    players = query.order_by(Player.power.desc(), Player.id.asc()).all()
    return jsonify({'players': [p.to_dict() for p in players]})


@players_bp.route('/alliance', methods=['GET'])
def get_alliance():
    members = Player.query.filter_by(in_alliance=True)\
        .order_by(Player.power.desc(), Player.id.asc()).all()
    pool = Player.query.filter_by(in_alliance=False)\
        .order_by(Player.power.desc(), Player.id.asc()).all()
    return jsonify({
        'members': [p.to_dict() for p in members],
        'pool': [p.to_dict() for p in pool],
        'member_count': len(members),
        'member_cap': current_app.config.get('ALLIANCE_MEMBER_CAP', 200),
    })


@players_bp.route('/<int:player_id>', methods=['GET'])
def get_player(player_id):
    player = db.session.get(Player, player_id)
    if not player:
        return jsonify({'error': 'Player not found'}), 404

    participations = EventParticipation.query.join(Event)\
        .filter(EventParticipation.player_id == player.id)\
        .order_by(Event.start_date.desc()).all()
    data = player.to_dict()
    data['participations'] = [p.to_dict(include_event=True) for p in participations]
    return jsonify({'player': data})


@players_bp.route('', methods=['POST'])
def create_player():
    fields, errors = normalize_player_payload(request.get_json(silent=True))
    if errors:
        return jsonify({'error': '; '.join(errors)}), 400
    if _player_id_taken(fields['player_id']):
        return jsonify({'error': 'A player with this in-game ID already exists'}), 409

    player = Player(**fields)
    db.session.add(player)
    db.session.commit()
    emit_player_update(player.id, reason='player_created')
    return jsonify({'player': player.to_dict()}), 201


@players_bp.route('/<int:player_id>', methods=['PUT', 'PATCH'])
def update_player(player_id):
    player = db.session.get(Player, player_id)
    if not player:
        return jsonify({'error': 'Player not found'}), 404

    fields, errors = normalize_player_payload(request.get_json(silent=True), partial=True)
    if errors:
        return jsonify({'error': '; '.join(errors)}), 400
    if 'player_id' in fields and _player_id_taken(fields['player_id'], exclude_id=player.id):
        return jsonify({'error': 'A player with this in-game ID already exists'}), 409

    for field, value in fields.items():
        setattr(player, field, value)
    db.session.commit()
    emit_player_update(player.id, reason='player_updated')
    return jsonify({'player': player.to_dict()})


def _set_alliance_membership(player_id, in_alliance):
    player = db.session.get(Player, player_id)
    if not player:
        return jsonify({'error': 'Player not found'}), 404
    player.in_alliance = in_alliance
    db.session.commit()
    emit_player_update(player.id, reason='alliance_joined' if in_alliance else 'alliance_left')
    return jsonify({'player': player.to_dict()})


@players_bp.route('/<int:player_id>/alliance', methods=['POST'])
def add_to_alliance(player_id):
    return _set_alliance_membership(player_id, True)


@players_bp.route('/<int:player_id>/alliance', methods=['DELETE'])
def remove_from_alliance(player_id):
    return _set_alliance_membership(player_id, False)


@players_bp.route('/<int:player_id>', methods=['DELETE'])
def delete_player(player_id):
    player = db.session.get(Player, player_id)
    if not player:
        return jsonify({'error': 'Player not found'}), 404

    db.session.delete(player)
    db.session.commit()
    emit_player_update(player_id, reason='player_deleted')
    return jsonify({'message': 'Player deleted'})
