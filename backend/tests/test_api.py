def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_room_state(client, registry):
    room = registry.create('sid-a', 'Alice', 2)
    res = client.get(f'/api/rooms/{room.room_id.lower()}')
    assert res.status_code == 200
    data = res.get_json()
    assert data['roomId'] == room.room_id
    assert data['status'] == 'LOBBY'
    assert data['players'][0]['username'] == 'Alice'
    assert data['players'][0]['totalScore'] == 0


def test_unknown_room_state(client):
    res = client.get('/api/rooms/ZZZZ')
    assert res.status_code == 404
    assert res.get_json() == {'error': 'Room not found'}
