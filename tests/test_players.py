"""Tests for player pool, alliance roster and dashboard routes."""
import json

from alliance_manager.models import EventParticipation


def _create(client, **overrides):
    data = {'player_id': '50001', 'name': 'Governor', 'power': 12_500_000, 'kill_points': 800_000}
    data.update(overrides)
    return client.post('/api/players', json=data)


def test_create_player(client):
    res = _create(client)
    assert res.status_code == 201
    player = json.loads(res.data)['player']
    assert player['power'] == 12_500_000
    assert player['power_display'] == '12.5M'
    assert player['kill_points_display'] == '800.0K'
    assert player['in_alliance'] is False


def test_create_player_coerces_bad_numbers(client):
    res = _create(client, power='lots', kill_points='', in_alliance='on')
    assert res.status_code == 201
    player = json.loads(res.data)['player']
    assert player['power'] == 0
    assert player['kill_points'] == 0
    assert player['in_alliance'] is True


def test_large_power_values_round_trip(client):
    res = _create(client, power='3200000000', kill_points=45_000_000_000)
    player = json.loads(res.data)['player']
    assert player['power'] == 3_200_000_000
    assert player['kill_points'] == 45_000_000_000
    assert player['power_display'] == '3.2B'


def test_out_of_range_power_is_capped(client):
    res = _create(client, power=10 ** 20, kill_points='1e30')
    assert res.status_code == 201
    player = json.loads(res.data)['player']
    assert player['power'] == 2 ** 63 - 1
    assert player['kill_points'] == 2 ** 63 - 1

    res = client.put(f"/api/players/{player['id']}", json={'power': '-5', 'kill_points': 'inf'})
    assert res.status_code == 200
    player = json.loads(res.data)['player']
    assert player['power'] == 0
    assert player['kill_points'] == 0


def test_create_player_requires_ids(client):
    assert _create(client, player_id='').status_code == 400
    assert _create(client, name='  ').status_code == 400
    assert client.post('/api/players', data='nope').status_code == 400


def test_duplicate_in_game_id_conflicts(client):
    _create(client)
    assert _create(client, name='Impostor').status_code == 409

    other = json.loads(_create(client, player_id='50002').data)['player']
    res = client.patch(f'/api/players/{other["id"]}', json={'player_id': '50001'})
    assert res.status_code == 409


def test_list_players_sorted_by_power_and_filtered(client):
    _create(client, player_id='1', name='Small Fry', power=100)
    _create(client, player_id='2', name='Whale', power=900_000_000, in_alliance=True)
    _create(client, player_id='3', name='Mid', power=50_000_000)

    players = json.loads(client.get('/api/players').data)['players']
    assert [p['name'] for p in players] == ['Whale', 'Mid', 'Small Fry']

    members = json.loads(client.get('/api/players?in_alliance=true').data)['players']
    assert [p['name'] for p in members] == ['Whale']

    pool = json.loads(client.get('/api/players?in_alliance=false').data)['players']
    assert [p['name'] for p in pool] == ['Mid', 'Small Fry']

    found = json.loads(client.get('/api/players?q=fry').data)['players']
    assert [p['name'] for p in found] == ['Small Fry']
    found = json.loads(client.get('/api/players?q=3').data)['players']
    assert [p['name'] for p in found] == ['Mid']


def test_partial_update_keeps_other_fields(client):
    player = json.loads(_create(client).data)['player']
    res = client.patch(f'/api/players/{player["id"]}', json={'power': 13_000_000})
    updated = json.loads(res.data)['player']
    assert updated['power'] == 13_000_000
    assert updated['name'] == 'Governor'
    assert updated['kill_points'] == 800_000


def test_alliance_add_and_remove(client):
    player = json.loads(_create(client).data)['player']
    res = client.post(f'/api/players/{player["id"]}/alliance')
    assert json.loads(res.data)['player']['in_alliance'] is True

    roster = json.loads(client.get('/api/players/alliance').data)
    assert roster['member_count'] == 1
    assert roster['member_cap'] == 200
    assert roster['pool'] == []

    res = client.delete(f'/api/players/{player["id"]}/alliance')
    assert json.loads(res.data)['player']['in_alliance'] is False
    assert client.post('/api/players/999/alliance').status_code == 404


def test_player_detail_lists_participations_newest_first(client):
    player = json.loads(_create(client).data)['player']
    for name, start in [('Old', '2026-01-01T00:00:00'), ('New', '2026-06-01T00:00:00')]:
        event = json.loads(client.post('/api/events', json={
            'name': name, 'type': 'MGE', 'start_date': start,
        }).data)['event']
        client.post(f'/api/events/{event["id"]}/participants', json={'player_id': player['id']})

    detail = json.loads(client.get(f'/api/players/{player["id"]}').data)['player']
    assert [p['event']['name'] for p in detail['participations']] == ['New', 'Old']
    assert client.get('/api/players/999').status_code == 404


def test_delete_player_cascades_participations(client, sample_event):
    player = json.loads(_create(client).data)['player']
    client.post(f'/api/events/{sample_event.id}/participants', json={'player_id': player['id']})
    assert client.delete(f'/api/players/{player["id"]}').status_code == 200
    assert EventParticipation.query.count() == 0
    assert client.delete(f'/api/players/{player["id"]}').status_code == 404


def test_dashboard_counts(client, sample_player, sample_event):
    _create(client)
    client.patch(f'/api/events/{sample_event.id}', json={'status': 'ACTIVE'})

    data = json.loads(client.get('/api/dashboard').data)
    assert data['total_players'] == 2
    assert data['alliance_players'] == 1
    assert data['total_events'] == 1
    assert data['active_events'] == 1
    assert data['recent_events'][0]['name'] == 'KvK Season 3'
