def _events(sio_client, name):
    return [pkt['args'][0] for pkt in sio_client.get_received('/ws') if pkt['name'] == name]


def test_socket_connect_receives_state(sio_client):
    # Ensure we are connected to /ws
    if not sio_client.is_connected('/ws'):
        sio_client.connect(namespace='/ws')
    assert sio_client.is_connected('/ws')

    received = sio_client.get_received('/ws')
    names = [pkt['name'] for pkt in received]
    assert 'connected' in names
    states = [pkt['args'][0] for pkt in received if pkt['name'] == 'state_update']
    assert states and states[-1]['state'] == 'idle'


def test_socket_round(sio_client, timer, clock):
    sio_client.get_received('/ws')  # flush

    sio_client.emit('start_game', namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(p['name'] == 'state_update' and p['args'][0]['state'] == 'waiting' for p in received)
    assert any(p['name'] == 'feedback' and p['args'][0] == {'pattern': [50]} for p in received)

    # Cue fires from the timer, outside any socket handler
    timer.fire()
    states = _events(sio_client, 'state_update')
    assert states[-1]['state'] == 'ready'

    clock.advance(333)
    sio_client.emit('react', namespace='/ws')
    states = _events(sio_client, 'state_update')
    assert states[-1]['state'] == 'finished'
    assert states[-1]['outcome'] == {'kind': 'success', 'time_ms': 333}


def test_socket_false_start(sio_client):
    sio_client.emit('start_game', namespace='/ws')
    sio_client.get_received('/ws')
    sio_client.emit('react', namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(p['name'] == 'feedback' and p['args'][0] == {'pattern': [200, 100, 200]} for p in received)
    states = [p['args'][0] for p in received if p['name'] == 'state_update']
    assert states[-1]['outcome'] == {'kind': 'false_start'}


def test_socket_clear_rankings_validates_payload(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('clear_rankings', {'confirmed': 'sure'}, namespace='/ws')
    assert _events(sio_client, 'error')


def test_socket_clear_declined_answers_caller(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('clear_rankings', {'confirmed': False}, namespace='/ws')
    states = _events(sio_client, 'state_update')
    assert states and states[-1]['rankings'] == []


def test_ping(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    assert _events(sio_client, 'pong') == [{'n': 1}]
