from flask import Blueprint, jsonify
from alliance_manager.models import Player, Event

dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.route('', methods=['GET'])
def get_dashboard():
    """Alliance overview: roster counts plus the five most recent events."""
    recent_events = Event.query.order_by(Event.start_date.desc(), Event.id.desc()).limit(5).all()
    return jsonify({
        'total_players': Player.query.count(),
        'alliance_players': Player.query.filter_by(in_alliance=True).count(),
        'total_events': Event.query.count(),
        'active_events': Event.query.filter_by(status='ACTIVE').count(),
        'recent_events': [e.to_dict() for e in recent_events],
    })
