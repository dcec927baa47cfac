"""Socket.IO broadcasts so open rosters and player pages refresh after writes."""
from flask import current_app
from alliance_manager.app import socketio
from alliance_manager.time_utils import utcnow_naive


def _emit(channel, payload):
    if not current_app.config.get('EMIT_REALTIME_UPDATES', True):
        return
    payload['updated_at'] = utcnow_naive().isoformat()
    socketio.emit(channel, payload)


def emit_event_update(event_id=None, reason=''):
    _emit('event_update', {'event_id': event_id, 'reason': reason})


def emit_player_update(player_id=None, reason=''):
    _emit('player_update', {'player_id': player_id, 'reason': reason})
