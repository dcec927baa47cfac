"""Static gear reference data: slots, troop/stat types and the gear item table.

Every item focuses on a single troop type. Stat values are percentage
bonuses, e.g. ``{'infantry': {'attack': 5}}`` means +5% infantry attack.
"""

GEAR_SLOTS = {
    'helmet': {'name': 'Helmet', 'icon': '👑'},
    'chest': {'name': 'Chest', 'icon': '👘'},
    'weapon': {'name': 'Weapon', 'icon': '⚔️'},
    'gloves': {'name': 'Gloves', 'icon': '🧤'},
    'legs': {'name': 'Legs', 'icon': '👖'},
    'boots': {'name': 'Boots', 'icon': '👢'},
    'accessory1': {'name': 'Accessory 1', 'icon': '💍'},
    'accessory2': {'name': 'Accessory 2', 'icon': '📿'},
}
SLOT_NAMES = tuple(GEAR_SLOTS)

TROOP_TYPES = ('infantry', 'cavalry', 'archer', 'siege')
STAT_TYPES = ('attack', 'defense', 'health')
RARITIES = ('common', 'uncommon', 'rare', 'epic', 'legendary')

TROOP_ICONS = {
    'infantry': '🛡️',
    'cavalry': '🐎',
    'archer': '🏹',
    'siege': '🏰',
}
STAT_ICONS = {
    'attack': '⚔️',
    'defense': '🛡️',
    'health': '❤️',
}


def _item(name, slot, rarity, stats):
    return {
        'name': name,
        'slot': slot,
        'rarity': rarity,
        'icon': GEAR_SLOTS[slot]['icon'],
        'stats': stats,
    }


GEAR_ITEMS = {
    # Helmets
    'helm_inf_leg': _item('Infantry War Helm', 'helmet', 'legendary',
                          {'infantry': {'attack': 5, 'defense': 8, 'health': 4}}),
    'helm_inf_epic': _item('Infantry Battle Helm', 'helmet', 'epic',
                           {'infantry': {'attack': 4, 'defense': 6, 'health': 3}}),
    'helm_cav_leg': _item('Cavalry War Helm', 'helmet', 'legendary',
                          {'cavalry': {'attack': 6, 'defense': 7, 'health': 4}}),
    'helm_cav_epic': _item('Cavalry Battle Helm', 'helmet', 'epic',
                           {'cavalry': {'attack': 4, 'defense': 5, 'health': 3}}),
    'helm_arc_leg': _item('Archer War Helm', 'helmet', 'legendary',
                          {'archer': {'attack': 7, 'defense': 5, 'health': 5}}),
    'helm_arc_epic': _item('Archer Battle Helm', 'helmet', 'epic',
                           {'archer': {'attack': 5, 'defense': 4, 'health': 3}}),

    # Chest
    'chest_inf_leg': _item('Infantry Plate Armor', 'chest', 'legendary',
                           {'infantry': {'attack': 4, 'defense': 10, 'health': 6}}),
    'chest_inf_epic': _item('Infantry Chain Mail', 'chest', 'epic',
                            {'infantry': {'defense': 7, 'health': 5}}),
    'chest_cav_leg': _item('Cavalry Riding Cloak', 'chest', 'legendary',
                           {'cavalry': {'attack': 6, 'defense': 8, 'health': 6}}),
    'chest_cav_epic': _item('Cavalry Light Armor', 'chest', 'epic',
                            {'cavalry': {'attack': 4, 'defense': 6, 'health': 4}}),
    'chest_arc_leg': _item("Archer's Cloak", 'chest', 'legendary',
                           {'archer': {'attack': 8, 'defense': 6, 'health': 5}}),
    'chest_arc_epic': _item("Archer's Vest", 'chest', 'epic',
                            {'archer': {'attack': 5, 'defense': 5, 'health': 4}}),

    # Weapons
    'weapon_inf_leg': _item('Hammer of the Silent', 'weapon', 'legendary',
                            {'infantry': {'attack': 12, 'defense': 4, 'health': 2}}),
    'weapon_inf_epic': _item('Infantry Sword', 'weapon', 'epic',
                             {'infantry': {'attack': 9, 'defense': 3}}),
    'weapon_cav_leg': _item('Blade of Calamity', 'weapon', 'legendary',
                            {'cavalry': {'attack': 13, 'defense': 3, 'health': 2}}),
    'weapon_cav_epic': _item('Cavalry Lance', 'weapon', 'epic',
                             {'cavalry': {'attack': 10, 'defense': 2}}),
    'weapon_arc_leg': _item('Bow of Precision', 'weapon', 'legendary',
                            {'archer': {'attack': 14, 'defense': 2, 'health': 2}}),
    'weapon_arc_epic': _item("Archer's Longbow", 'weapon', 'epic',
                             {'archer': {'attack': 10, 'defense': 2}}),

    # Gloves
    'gloves_inf_leg': _item('Vanguard Gauntlets', 'gloves', 'legendary',
                            {'infantry': {'attack': 6, 'defense': 6, 'health': 4}}),
    'gloves_inf_epic': _item('Infantry Gloves', 'gloves', 'epic',
                             {'infantry': {'attack': 4, 'defense': 4, 'health': 3}}),
    'gloves_cav_leg': _item("Rider's Grips", 'gloves', 'legendary',
                            {'cavalry': {'attack': 7, 'defense': 5, 'health': 4}}),
    'gloves_cav_epic': _item('Cavalry Gloves', 'gloves', 'epic',
                             {'cavalry': {'attack': 5, 'defense': 4, 'health': 3}}),
    'gloves_arc_leg': _item('Eternal Night', 'gloves', 'legendary',
                            {'archer': {'attack': 8, 'defense': 4, 'health': 4}}),
    'gloves_arc_epic': _item("Archer's Gloves", 'gloves', 'epic',
                             {'archer': {'attack': 6, 'defense': 3, 'health': 3}}),

    # Legs
    'legs_inf_leg': _item("Sentry's Breeches", 'legs', 'legendary',
                          {'infantry': {'attack': 3, 'defense': 10, 'health': 6}}),
    'legs_inf_epic': _item('Infantry Leggings', 'legs', 'epic',
                           {'infantry': {'defense': 7, 'health': 4}}),
    'legs_cav_leg': _item("Rider's Pants", 'legs', 'legendary',
                          {'cavalry': {'attack': 4, 'defense': 8, 'health': 6}}),
    'legs_cav_epic': _item('Cavalry Leggings', 'legs', 'epic',
                           {'cavalry': {'defense': 6, 'health': 5}}),
    'legs_arc_leg': _item("Archer's Greaves", 'legs', 'legendary',
                          {'archer': {'attack': 5, 'defense': 7, 'health': 6}}),
    'legs_arc_epic': _item("Archer's Pants", 'legs', 'epic',
                           {'archer': {'defense': 5, 'health': 5}}),

    # Boots
    'boots_inf_leg': _item('Infantry War Boots', 'boots', 'legendary',
                           {'infantry': {'attack': 3, 'defense': 6, 'health': 8}}),
    'boots_inf_epic': _item('Infantry Boots', 'boots', 'epic',
                            {'infantry': {'defense': 4, 'health': 5}}),
    'boots_cav_leg': _item('Windswept Boots', 'boots', 'legendary',
                           {'cavalry': {'attack': 4, 'defense': 6, 'health': 8}}),
    'boots_cav_epic': _item('Cavalry Boots', 'boots', 'epic',
                            {'cavalry': {'defense': 5, 'health': 5}}),
    'boots_arc_leg': _item("Archer's Swift Boots", 'boots', 'legendary',
                           {'archer': {'attack': 5, 'defense': 5, 'health': 7}}),
    'boots_arc_epic': _item("Archer's Boots", 'boots', 'epic',
                            {'archer': {'defense': 4, 'health': 5}}),

    # Accessories (usable in either accessory slot)
    'acc_inf_leg': _item('Infantry Horn', 'accessory1', 'legendary',
                         {'infantry': {'attack': 6, 'defense': 5, 'health': 5}}),
    'acc_inf_epic': _item('Infantry Ring', 'accessory1', 'epic',
                          {'infantry': {'attack': 4, 'defense': 3, 'health': 3}}),
    'acc_cav_leg': _item('Cavalry Talisman', 'accessory1', 'legendary',
                         {'cavalry': {'attack': 7, 'defense': 4, 'health': 5}}),
    'acc_cav_epic': _item('Cavalry Ring', 'accessory1', 'epic',
                          {'cavalry': {'attack': 5, 'defense': 3, 'health': 3}}),
    'acc_arc_leg': _item("Archer's Amulet", 'accessory1', 'legendary',
                         {'archer': {'attack': 8, 'defense': 3, 'health': 5}}),
    'acc_arc_epic': _item("Archer's Ring", 'accessory1', 'epic',
                          {'archer': {'attack': 5, 'defense': 3, 'health': 3}}),
    'acc_siege_leg': _item('Siege Engine Core', 'accessory1', 'legendary',
                           {'siege': {'attack': 10, 'defense': 4, 'health': 4}}),
    'acc_siege_epic': _item('Siege Ring', 'accessory1', 'epic',
                            {'siege': {'attack': 7, 'defense': 3, 'health': 3}}),
}


def get_gear(gear_id):
    if not gear_id:
        return None
    return GEAR_ITEMS.get(gear_id)


def gear_for_slot(slot):
    """List catalog items that fit a slot, each with its id included."""
    results = []
    for gear_id, gear in GEAR_ITEMS.items():
        fits = gear['slot'] == slot or (slot == 'accessory2' and gear['slot'] == 'accessory1')
        if fits:
            results.append({'id': gear_id, **gear})
    return results


def catalog_payload():
    return {
        'slots': GEAR_SLOTS,
        'troop_types': list(TROOP_TYPES),
        'stat_types': list(STAT_TYPES),
        'rarities': list(RARITIES),
        'troop_icons': TROOP_ICONS,
        'stat_icons': STAT_ICONS,
        'items': [{'id': gear_id, **gear} for gear_id, gear in GEAR_ITEMS.items()],
    }
