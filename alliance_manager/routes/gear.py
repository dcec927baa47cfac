from flask import Blueprint, request, jsonify
from alliance_manager.services.gear_catalog import GEAR_SLOTS, catalog_payload, gear_for_slot
from alliance_manager.services.set_stats import calculate_set_stats

gear_bp = Blueprint('gear', __name__)


@gear_bp.route('', methods=['GET'])
def get_catalog():
    return jsonify(catalog_payload())


@gear_bp.route('/slots/<slot>', methods=['GET'])
def get_slot_gear(slot):
    if slot not in GEAR_SLOTS:
        return jsonify({'error': 'Unknown gear slot'}), 404
    return jsonify({'slot': slot, 'items': gear_for_slot(slot)})


@gear_bp.route('/stats', methods=['POST'])
def preview_stats():
    """Aggregate stats for an unsaved loadout (list of ids or slot mapping)."""
    data = request.get_json(silent=True) or {}
    equipped = data.get('gear') if isinstance(data, dict) else None
    if not isinstance(equipped, (list, dict)):
        return jsonify({'error': 'gear must be a list or an object'}), 400
    if isinstance(equipped, dict):
        equipped = {k: v for k, v in equipped.items() if isinstance(v, str)}
    else:
        equipped = [v for v in equipped if isinstance(v, str)]
    return jsonify({'stats': calculate_set_stats(equipped)})
