import json
from alliance_manager.app import db
from alliance_manager.services.event_catalog import EVENT_STATUS_LABELS, EVENT_TYPES, effective_max_players
from alliance_manager.services.formatting import compact_number
from alliance_manager.services.gear_catalog import SLOT_NAMES
from alliance_manager.services.payloads import parse_bool
from alliance_manager.services.set_stats import calculate_set_stats
from alliance_manager.time_utils import utcnow_naive

MAX_ATTUNEMENT = 5


def _safe_json(raw_value, fallback=None):
    if fallback is None:
        fallback = {}
    if not raw_value:
        return fallback
    try:
        return json.loads(raw_value)
    except (TypeError, ValueError):
        return fallback


def default_enhancement():
    return {'crit': False, 'attunement': 0}


def clamp_attunement(value):
    try:
        level = int(value)
    except (TypeError, ValueError):
        return 0
    return max(0, min(level, MAX_ATTUNEMENT))


def normalize_enhancements(raw):
    """Map every gear slot to a ``{'crit': bool, 'attunement': 0..5}`` record.

    Unknown slots are dropped and malformed values fall back to defaults.
    """
    if not isinstance(raw, dict):
        raw = {}
    normalized = {}
    for slot in SLOT_NAMES:
        entry = raw.get(slot)
        if not isinstance(entry, dict):
            entry = {}
        normalized[slot] = {
            'crit': parse_bool(entry.get('crit'), default=False),
            'attunement': clamp_attunement(entry.get('attunement', 0)),
        }
    return normalized


class Player(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    player_id = db.Column(db.String(64), unique=True, nullable=False)
    name = db.Column(db.String(120), nullable=False)
    power = db.Column(db.BigInteger, default=0, nullable=False)
    kill_points = db.Column(db.BigInteger, default=0, nullable=False)
    in_alliance = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=lambda: utcnow_naive())
    updated_at = db.Column(db.DateTime, default=lambda: utcnow_naive(),
                           onupdate=lambda: utcnow_naive())

    equipment_sets = db.relationship(
        'EquipmentSet', backref='player', cascade='all, delete-orphan',
        order_by='EquipmentSet.set_number',
    )
    participations = db.relationship(
        'EventParticipation', backref='player', cascade='all, delete-orphan',
    )

    def to_dict(self):
        return {
            'id': self.id, 'player_id': self.player_id, 'name': self.name,
            'power': self.power or 0, 'kill_points': self.kill_points or 0,
            'power_display': compact_number(self.power),
            'kill_points_display': compact_number(self.kill_points),
            'in_alliance': bool(self.in_alliance),
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }


class Event(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    type = db.Column(db.String(40), nullable=False)
    max_players = db.Column(db.Integer, nullable=True)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=True)
    status = db.Column(db.String(20), default='UPCOMING', nullable=False)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=lambda: utcnow_naive())
    updated_at = db.Column(db.DateTime, default=lambda: utcnow_naive(),
                           onupdate=lambda: utcnow_naive())

    participations = db.relationship(
        'EventParticipation', backref='event', cascade='all, delete-orphan',
        order_by='EventParticipation.position',
    )

    def to_dict(self):
        type_info = EVENT_TYPES.get(self.type) or {}
        return {
            'id': self.id, 'name': self.name, 'type': self.type,
            'type_name': type_info.get('name', self.type),
            'max_players': self.max_players,
            'effective_max_players': effective_max_players(self),
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'end_date': self.end_date.isoformat() if self.end_date else None,
            'status': self.status,
            'status_label': EVENT_STATUS_LABELS.get(self.status, self.status),
            'description': self.description,
            'participant_count': len(self.participations),
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class EquipmentSet(db.Model):
    __table_args__ = (
        db.UniqueConstraint('player_id', 'set_number', name='uq_equipment_set_player_number'),
    )

    id = db.Column(db.Integer, primary_key=True)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id'), nullable=False)
    set_number = db.Column(db.Integer, nullable=False)
    name = db.Column(db.String(60), nullable=True)
    helmet = db.Column(db.String(64), nullable=True)
    chest = db.Column(db.String(64), nullable=True)
    weapon = db.Column(db.String(64), nullable=True)
    gloves = db.Column(db.String(64), nullable=True)
    legs = db.Column(db.String(64), nullable=True)
    boots = db.Column(db.String(64), nullable=True)
    accessory1 = db.Column(db.String(64), nullable=True)
    accessory2 = db.Column(db.String(64), nullable=True)
    enhancements = db.Column(db.Text, default='{}')
    armament_image_url = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=lambda: utcnow_naive())
    updated_at = db.Column(db.DateTime, default=lambda: utcnow_naive(),
                           onupdate=lambda: utcnow_naive())

    @property
    def display_name(self):
        return self.name or f'Set {self.set_number}'

    def slots(self):
        return {slot: getattr(self, slot) for slot in SLOT_NAMES}

    def get_enhancements(self):
        return normalize_enhancements(_safe_json(self.enhancements))

    def set_enhancements(self, value):
        self.enhancements = json.dumps(normalize_enhancements(value), sort_keys=True)

    def to_dict(self):
        slots = self.slots()
        return {
            'id': self.id, 'player_id': self.player_id,
            'set_number': self.set_number, 'name': self.name,
            'display_name': self.display_name,
            'slots': slots,
            'enhancements': self.get_enhancements(),
            'stats': calculate_set_stats(slots),
            'armament_image_url': self.armament_image_url,
        }


class EventParticipation(db.Model):
    __table_args__ = (
        db.UniqueConstraint('player_id', 'event_id', name='uq_event_participation_player_event'),
        db.Index('ix_event_participation_event_position', 'event_id', 'position'),
    )

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(db.Integer, db.ForeignKey('event.id'), nullable=False)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id'), nullable=False)
    participated = db.Column(db.Boolean, default=False, nullable=False)
    score = db.Column(db.Integer, nullable=True)
    position = db.Column(db.Integer, default=0, nullable=False)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=lambda: utcnow_naive())

    def to_dict(self, include_player=False, include_event=False):
        data = {
            'id': self.id, 'event_id': self.event_id, 'player_id': self.player_id,
            'participated': bool(self.participated), 'score': self.score,
            'position': self.position, 'notes': self.notes,
        }
        if include_player:
            data['player'] = self.player.to_dict() if self.player else None
        if include_event:
            data['event'] = {
                'id': self.event.id, 'name': self.event.name, 'type': self.event.type,
                'status': self.event.status,
                'start_date': self.event.start_date.isoformat() if self.event.start_date else None,
            } if self.event else None
        return data
