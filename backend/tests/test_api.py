def test_index_and_health(client):
    assert client.get('/').status_code == 200
    res = client.get('/health')
    assert res.get_json() == {'status': 'healthy'}


def test_room_state_is_public_view(client, room_machine):
    room_machine.create_host('Ana', 'sid-host')
    room_machine.join_as_player('Luis', 'sid-player')

    res = client.get('/api/room/state')
    assert res.status_code == 200
    state = res.get_json()
    assert state['id'] == 'TEST-ROOM'
    assert state['hostName'] == 'Ana'
    assert state['phase'] == 'waiting'
    assert [p['name'] for p in state['players']] == ['Luis']
    assert 'hostSecret' not in state
    assert 'card' not in state['players'][0]


def test_pattern_catalog_endpoints(client):
    letters = client.get('/api/room/patterns').get_json()['letters']
    assert len(letters) == 26

    res = client.get('/api/room/patterns/x')
    assert res.status_code == 200
    body = res.get_json()
    assert body['letter'] == 'X'
    assert body['pattern'][0] == [True, False, False, False, True]

    res = client.get('/api/room/patterns/12')
    assert res.status_code == 400
    assert 'error' in res.get_json()
