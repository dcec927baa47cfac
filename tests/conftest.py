import pytest
from datetime import datetime
from alliance_manager.app import create_app, db


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sample_player(app):
    """Create a sample alliance member for testing."""
    from alliance_manager.models import Player
    player = Player(
        player_id='10001', name='Test Governor',
        power=45_000_000, kill_points=1_200_000_000, in_alliance=True,
    )
    db.session.add(player)
    db.session.commit()
    return player


@pytest.fixture
def sample_event(app):
    """Create a sample uncapped event for testing."""
    from alliance_manager.models import Event
    event = Event(
        name='KvK Season 3', type='KVK', status='UPCOMING',
        start_date=datetime(2026, 11, 1, 12, 0),
    )
    db.session.add(event)
    db.session.commit()
    return event
