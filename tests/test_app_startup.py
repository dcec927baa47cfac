"""Tests for app startup helpers and configuration guards."""
import pytest
from sqlalchemy import inspect, text

from alliance_manager.app import _parse_allowed_origins, _run_lightweight_migrations, create_app, db
from alliance_manager.config import ProductionConfig


def test_parse_allowed_origins():
    assert _parse_allowed_origins('') == '*'
    assert _parse_allowed_origins(' * ') == '*'
    assert _parse_allowed_origins('https://a.example.com, https://b.example.com') == [
        'https://a.example.com', 'https://b.example.com',
    ]
    assert _parse_allowed_origins(['https://a.example.com', '']) == ['https://a.example.com']


def test_production_requires_secret_key(monkeypatch):
    monkeypatch.setattr(ProductionConfig, 'SQLALCHEMY_DATABASE_URI', 'sqlite:///:memory:')
    monkeypatch.setattr(ProductionConfig, 'SECRET_KEY', 'dev-secret-key-change-in-prod')
    with pytest.raises(RuntimeError):
        create_app('production')


def test_production_requires_explicit_origins(monkeypatch):
    monkeypatch.setattr(ProductionConfig, 'SQLALCHEMY_DATABASE_URI', 'sqlite:///:memory:')
    monkeypatch.setattr(ProductionConfig, 'SECRET_KEY', 'a-real-secret')
    monkeypatch.setattr(ProductionConfig, 'CORS_ALLOWED_ORIGINS', '*')
    with pytest.raises(RuntimeError):
        create_app('production')


def test_migrations_add_missing_columns(app):
    db.drop_all()
    with db.engine.begin() as connection:
        connection.execute(text(
            'CREATE TABLE equipment_set (id INTEGER PRIMARY KEY, player_id INTEGER, set_number INTEGER)'
        ))
        connection.execute(text(
            'CREATE TABLE event_participation (id INTEGER PRIMARY KEY, event_id INTEGER, player_id INTEGER)'
        ))

    _run_lightweight_migrations()

    inspector = inspect(db.engine)
    set_columns = {col['name'] for col in inspector.get_columns('equipment_set')}
    participation_columns = {col['name'] for col in inspector.get_columns('event_participation')}
    assert {'enhancements', 'armament_image_url'} <= set_columns
    assert 'position' in participation_columns

    # Running again is harmless
    _run_lightweight_migrations()

    with db.engine.begin() as connection:
        connection.execute(text('DROP TABLE equipment_set'))
        connection.execute(text('DROP TABLE event_participation'))


def test_gear_catalog_endpoint(client):
    res = client.get('/api/gear')
    assert res.status_code == 200
    data = res.get_json()
    assert data['troop_types'] == ['infantry', 'cavalry', 'archer', 'siege']
    assert len(data['slots']) == 8

    res = client.get('/api/gear/slots/accessory2')
    assert all(item['slot'] == 'accessory1' for item in res.get_json()['items'])
    assert client.get('/api/gear/slots/cape').status_code == 404

    res = client.post('/api/gear/stats', json={'gear': {'helmet': 'helm_inf_leg', 'weapon': None}})
    assert res.get_json()['stats'] == {'infantry': {'attack': 5, 'defense': 8, 'health': 4}}
    assert client.post('/api/gear/stats', json={'gear': 'helm_inf_leg'}).status_code == 400
