"""Equipment sets, gear slots and per-slot enhancements for one player."""
from flask import Blueprint, request, jsonify
from alliance_manager.app import db
from alliance_manager.models import Player
from alliance_manager.services import equipment_sets
from alliance_manager.services.equipment_sets import (
    EquipmentSetLimitError, EquipmentSetNotFound, LastEquipmentSetError,
)
from alliance_manager.services.gear_catalog import SLOT_NAMES
from alliance_manager.services.payloads import parse_bool, parse_int
from alliance_manager.services.realtime import emit_player_update

equipment_bp = Blueprint('equipment', __name__)


def _load_player(player_id):
    return db.session.get(Player, player_id)


def _set_response(player_id, equipment_set, reason, status=200):
    emit_player_update(player_id, reason=reason)
    return jsonify({'equipment_set': equipment_set.to_dict()}), status


@equipment_bp.errorhandler(EquipmentSetLimitError)
@equipment_bp.errorhandler(LastEquipmentSetError)
def _handle_limit(error):
    return jsonify({'error': str(error)}), 400


@equipment_bp.errorhandler(EquipmentSetNotFound)
def _handle_missing_set(error):
    return jsonify({'error': str(error)}), 404


@equipment_bp.route('/<int:player_id>/equipment', methods=['GET'])
def get_equipment(player_id):
    """List a player's sets, creating set 1 on first view."""
    player = _load_player(player_id)
    if not player:
        return jsonify({'error': 'Player not found'}), 404

    sets = equipment_sets.initialize_sets(player.id)
    return jsonify({
        'player': player.to_dict(),
        'equipment_sets': [s.to_dict() for s in sets],
        'max_sets': equipment_sets.max_sets(),
    })


@equipment_bp.route('/<int:player_id>/equipment', methods=['POST'])
def add_equipment_set(player_id):
    if not _load_player(player_id):
        return jsonify({'error': 'Player not found'}), 404
    equipment_set = equipment_sets.add_set(player_id)
    return _set_response(player_id, equipment_set, 'equipment_set_added', 201)


@equipment_bp.route('/<int:player_id>/equipment/<int:set_number>', methods=['DELETE'])
def delete_equipment_set(player_id, set_number):
    if not _load_player(player_id):
        return jsonify({'error': 'Player not found'}), 404
    equipment_sets.delete_set(player_id, set_number)
    emit_player_update(player_id, reason='equipment_set_deleted')
    return jsonify({'message': 'Equipment set deleted'})


@equipment_bp.route('/<int:player_id>/equipment/<int:set_number>', methods=['PATCH'])
def update_equipment_set(player_id, set_number):
    """Rename a set and/or attach an armament screenshot URL."""
    if not _load_player(player_id):
        return jsonify({'error': 'Player not found'}), 404
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Invalid JSON payload'}), 400

    equipment_set = equipment_sets.require_set(player_id, set_number)
    if 'name' in data:
        equipment_set = equipment_sets.rename_set(player_id, set_number, data.get('name'))
    if 'armament_image_url' in data:
        equipment_set = equipment_sets.set_armament_image(
            player_id, set_number, data.get('armament_image_url')
        )
    return _set_response(player_id, equipment_set, 'equipment_set_updated')


@equipment_bp.route('/<int:player_id>/equipment/<int:set_number>/slots/<slot>', methods=['PUT'])
def set_gear_slot(player_id, set_number, slot):
    if not _load_player(player_id):
        return jsonify({'error': 'Player not found'}), 404
    if slot not in SLOT_NAMES:
        return jsonify({'error': f'Unknown gear slot: {slot}'}), 400
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Invalid JSON payload'}), 400

    equipment_set = equipment_sets.assign_gear(player_id, set_number, slot, data.get('gear_id'))
    return _set_response(player_id, equipment_set, 'gear_slot_updated')


@equipment_bp.route('/<int:player_id>/equipment/<int:set_number>/slots/<slot>', methods=['DELETE'])
def clear_gear_slot(player_id, set_number, slot):
    if not _load_player(player_id):
        return jsonify({'error': 'Player not found'}), 404
    if slot not in SLOT_NAMES:
        return jsonify({'error': f'Unknown gear slot: {slot}'}), 400

    equipment_set = equipment_sets.assign_gear(player_id, set_number, slot, None)
    return _set_response(player_id, equipment_set, 'gear_slot_cleared')


@equipment_bp.route(
    '/<int:player_id>/equipment/<int:set_number>/slots/<slot>/enhancement', methods=['PATCH']
)
def update_gear_enhancement(player_id, set_number, slot):
    if not _load_player(player_id):
        return jsonify({'error': 'Player not found'}), 404
    if slot not in SLOT_NAMES:
        return jsonify({'error': f'Unknown gear slot: {slot}'}), 400
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Invalid JSON payload'}), 400

    crit = parse_bool(data.get('crit')) if 'crit' in data else None
    attunement = parse_int(data.get('attunement'), default=0) if 'attunement' in data else None
    equipment_set = equipment_sets.update_enhancement(
        player_id, set_number, slot, crit=crit, attunement=attunement,
    )
    return _set_response(player_id, equipment_set, 'gear_enhancement_updated')
