import os
from flask import Flask, send_from_directory, jsonify, abort, current_app
from flask_sqlalchemy import SQLAlchemy
from flask_socketio import SocketIO
from flask_cors import CORS
from sqlalchemy import inspect, text
from alliance_manager.config import config

db = SQLAlchemy()
socketio = SocketIO()

FRONTEND_DIR = os.path.join(os.path.dirname(__file__), '..', 'frontend')


def _parse_allowed_origins(raw_origins):
    if not raw_origins:
        return '*'

    if isinstance(raw_origins, (list, tuple, set)):
        cleaned = [origin for origin in raw_origins if origin]
        return cleaned or '*'

    raw_text = str(raw_origins).strip()
    if not raw_text or raw_text == '*':
        return '*'

    origins = [origin.strip() for origin in raw_text.split(',') if origin.strip()]
    return origins or '*'


def _run_lightweight_migrations():
    """Apply small schema updates for databases created by older versions."""
    inspector = inspect(db.engine)
    table_names = inspector.get_table_names()

    set_columns = (
        {col['name'] for col in inspector.get_columns('equipment_set')}
        if 'equipment_set' in table_names else set()
    )
    participation_columns = (
        {col['name'] for col in inspector.get_columns('event_participation')}
        if 'event_participation' in table_names else set()
    )
    with db.engine.begin() as connection:
        if 'equipment_set' in table_names:
            if 'enhancements' not in set_columns:
                connection.execute(text(
                    "ALTER TABLE equipment_set ADD COLUMN enhancements TEXT DEFAULT '{}'"
                ))
            if 'armament_image_url' not in set_columns:
                connection.execute(text(
                    'ALTER TABLE equipment_set ADD COLUMN armament_image_url TEXT'
                ))

        if 'event_participation' in table_names:
            if 'position' not in participation_columns:
                connection.execute(text(
                    'ALTER TABLE event_participation ADD COLUMN position INTEGER NOT NULL DEFAULT 0'
                ))
            connection.execute(text(
                'CREATE INDEX IF NOT EXISTS ix_event_participation_event_position '
                'ON event_participation (event_id, position)'
            ))


def create_app(config_name='development'):
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.config['MAX_CONTENT_LENGTH'] = app.config.get('UPLOAD_MAX_BYTES', 5 * 1024 * 1024) * 2

    allowed_origins = _parse_allowed_origins(app.config.get('CORS_ALLOWED_ORIGINS', '*'))
    if str(config_name).strip().lower() == 'production':
        secret_key = str(app.config.get('SECRET_KEY') or '').strip()
        if not secret_key or secret_key == 'dev-secret-key-change-in-prod':
            raise RuntimeError('SECRET_KEY must be set to a non-default value in production')
        if allowed_origins == '*':
            raise RuntimeError('CORS_ALLOWED_ORIGINS must be explicitly set in production')

    db.init_app(app)
    socketio.init_app(
        app,
        cors_allowed_origins=allowed_origins,
        async_mode=app.config.get('SOCKETIO_ASYNC_MODE', 'threading'),
    )
    CORS(app, resources={r'/api/*': {'origins': allowed_origins}})

    from alliance_manager.routes.players import players_bp
    from alliance_manager.routes.equipment import equipment_bp
    from alliance_manager.routes.events import events_bp
    from alliance_manager.routes.gear import gear_bp
    from alliance_manager.routes.uploads import uploads_bp
    from alliance_manager.routes.dashboard import dashboard_bp

    app.register_blueprint(players_bp, url_prefix='/api/players')
    app.register_blueprint(equipment_bp, url_prefix='/api/players')
    app.register_blueprint(events_bp, url_prefix='/api/events')
    app.register_blueprint(gear_bp, url_prefix='/api/gear')
    app.register_blueprint(uploads_bp, url_prefix='/api/upload')
    app.register_blueprint(dashboard_bp, url_prefix='/api/dashboard')

    @app.errorhandler(413)
    def _payload_too_large(_error):
        return jsonify({'error': 'Uploaded file is too large'}), 413

    @app.route('/uploads/<path:filename>')
    def uploaded_file(filename):
        upload_folder = str(current_app.config.get('UPLOAD_FOLDER') or '').strip()
        if not upload_folder:
            abort(404)
        return send_from_directory(os.path.abspath(upload_folder), filename)

    @app.route('/')
    def index():
        return send_from_directory(FRONTEND_DIR, 'index.html')

    @app.route('/<path:filename>')
    def frontend_files(filename):
        return send_from_directory(FRONTEND_DIR, filename)

    with app.app_context():
        from alliance_manager import models  # noqa: F401
        db.create_all()
        _run_lightweight_migrations()

    return app
