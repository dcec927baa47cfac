"""Aggregate troop stat bonuses across the gear equipped in one set."""
from alliance_manager.services.gear_catalog import STAT_TYPES, TROOP_TYPES, get_gear


def _equipped_ids(equipped):
    if isinstance(equipped, dict):
        return list(equipped.values())
    return list(equipped or [])


def calculate_set_stats(equipped):
    """Sum percentage bonuses per troop type and stat type.

    ``equipped`` is either an iterable of gear ids or a mapping of
    slot -> gear id. Empty and unknown ids are ignored. Troop types with
    no contribution and zero-valued stats are left out of the result.
    """
    totals = {}
    for gear_id in _equipped_ids(equipped):
        gear = get_gear(gear_id)
        if not gear:
            continue

        for troop_type in TROOP_TYPES:
            troop_stats = gear['stats'].get(troop_type)
            if not troop_stats:
                continue
            for stat_type in STAT_TYPES:
                value = troop_stats.get(stat_type)
                if value:
                    bucket = totals.setdefault(troop_type, {})
                    bucket[stat_type] = bucket.get(stat_type, 0) + value

    return totals
