"""Equipment set lifecycle for a player: up to seven numbered gear loadouts."""
from flask import current_app
from alliance_manager.app import db
from alliance_manager.models import EquipmentSet, clamp_attunement, default_enhancement
from alliance_manager.services.gear_catalog import SLOT_NAMES
from alliance_manager.services.payloads import clean_text

DEFAULT_MAX_SETS = 7


class EquipmentSetLimitError(ValueError):
    """Raised when a player already has the maximum number of sets."""


class EquipmentSetNotFound(LookupError):
    pass


class LastEquipmentSetError(ValueError):
    """Raised when deleting would leave a player with no equipment sets."""


def max_sets():
    return int(current_app.config.get('MAX_EQUIPMENT_SETS', DEFAULT_MAX_SETS) or DEFAULT_MAX_SETS)


def list_sets(player_id):
    return EquipmentSet.query.filter_by(player_id=player_id)\
        .order_by(EquipmentSet.set_number.asc()).all()


def get_set(player_id, set_number):
    return EquipmentSet.query.filter_by(player_id=player_id, set_number=set_number).first()


def require_set(player_id, set_number):
    equipment_set = get_set(player_id, set_number)
    if not equipment_set:
        raise EquipmentSetNotFound(f'Equipment set {set_number} not found')
    return equipment_set


def initialize_sets(player_id):
    """Create set 1 for a player that has none; no-op otherwise."""
    if not EquipmentSet.query.filter_by(player_id=player_id).first():
        db.session.add(EquipmentSet(player_id=player_id, set_number=1))
        db.session.commit()
    return list_sets(player_id)


def next_free_set_number(used_numbers, limit):
    """Lowest set number in 1..limit not already used, or None when full."""
    used = set(used_numbers)
    for number in range(1, limit + 1):
        if number not in used:
            return number
    return None


def add_set(player_id):
    existing = list_sets(player_id)
    limit = max_sets()
    next_number = None
    if len(existing) < limit:
        next_number = next_free_set_number((s.set_number for s in existing), limit)
    if next_number is None:
        current_app.logger.info('Player %s already has %s equipment sets', player_id, limit)
        raise EquipmentSetLimitError(f'Maximum {limit} equipment sets allowed')

    equipment_set = EquipmentSet(player_id=player_id, set_number=next_number)
    db.session.add(equipment_set)
    db.session.commit()
    return equipment_set


def delete_set(player_id, set_number):
    equipment_set = require_set(player_id, set_number)
    if len(list_sets(player_id)) <= 1:
        raise LastEquipmentSetError('A player must keep at least one equipment set')
    db.session.delete(equipment_set)
    db.session.commit()


def _get_or_create_set(player_id, set_number):
    equipment_set = get_set(player_id, set_number)
    if equipment_set:
        return equipment_set
    limit = max_sets()
    if set_number < 1 or set_number > limit:
        raise EquipmentSetNotFound(f'Equipment set {set_number} not found')
    if EquipmentSet.query.filter_by(player_id=player_id).count() >= limit:
        raise EquipmentSetLimitError(f'Maximum {limit} equipment sets allowed')
    equipment_set = EquipmentSet(player_id=player_id, set_number=set_number)
    db.session.add(equipment_set)
    return equipment_set


def _validate_slot(slot):
    if slot not in SLOT_NAMES:
        raise ValueError(f'Unknown gear slot: {slot}')


def assign_gear(player_id, set_number, slot, gear_id):
    """Put a gear id in a slot, or clear it when gear_id is empty.

    Clearing a slot also resets its enhancement so a later item does not
    inherit stale crit/attunement state.
    """
    _validate_slot(slot)
    equipment_set = _get_or_create_set(player_id, set_number)
    gear_id = clean_text(gear_id, 64) or None
    setattr(equipment_set, slot, gear_id)

    if gear_id is None:
        enhancements = equipment_set.get_enhancements()
        enhancements[slot] = default_enhancement()
        equipment_set.set_enhancements(enhancements)

    db.session.commit()
    return equipment_set


def update_enhancement(player_id, set_number, slot, crit=None, attunement=None):
    """Merge a partial crit/attunement update into one slot's enhancement."""
    _validate_slot(slot)
    equipment_set = require_set(player_id, set_number)
    enhancements = equipment_set.get_enhancements()
    entry = dict(enhancements[slot])
    if crit is not None:
        entry['crit'] = bool(crit)
    if attunement is not None:
        entry['attunement'] = clamp_attunement(attunement)
    enhancements[slot] = entry
    equipment_set.set_enhancements(enhancements)
    db.session.commit()
    return equipment_set


def rename_set(player_id, set_number, name):
    equipment_set = require_set(player_id, set_number)
    equipment_set.name = clean_text(name, 60) or None
    db.session.commit()
    return equipment_set


def set_armament_image(player_id, set_number, image_url):
    equipment_set = _get_or_create_set(player_id, set_number)
    equipment_set.armament_image_url = str(image_url).strip() if image_url else None
    db.session.commit()
    return equipment_set
