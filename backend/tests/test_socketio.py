def names(packets):
    return [pkt['name'] for pkt in packets]


def first_args(packets, name):
    return [pkt['args'][0] for pkt in packets if pkt['name'] == name]


def test_socket_connect_receives_snapshot(sio_client):
    # Ensure we are connected to /ws
    if not sio_client.is_connected('/ws'):
        sio_client.connect(namespace='/ws')
    assert sio_client.is_connected('/ws')

    received = sio_client.get_received('/ws')
    assert 'connected' in names(received)
    snapshot = first_args(received, 'state_update')[0]
    assert len(snapshot['holes']) == 12
    assert snapshot['is_game_active'] is False


def test_ping_pong(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert first_args(received, 'pong') == [{'n': 1}]


def test_start_game_broadcasts_reset(sio_client, game):
    sio_client.get_received('/ws')
    sio_client.emit('start_game', namespace='/ws')
    received = sio_client.get_received('/ws')
    assert names(received) == ['score_updated', 'timer_updated', 'board_reset']
    assert first_args(received, 'score_updated') == [{'score': 0, 'message': "Let's Go, your total score is 0"}]
    assert first_args(received, 'timer_updated') == [{'seconds': 30}]
    assert game.state.is_game_active is True


def test_spawn_and_whack_over_socket(sio_client, game):
    sio_client.emit('start_game', namespace='/ws')
    sio_client.get_received('/ws')

    game.scheduler.advance(1)
    received = sio_client.get_received('/ws')
    spawned = first_args(received, 'hole_updated')
    assert len(spawned) == 1
    hole = spawned[0]
    assert hole['has_mole'] is True
    assert hole['handle'] == f"hole-{hole['id']}"
    assert first_args(received, 'timer_updated') == [{'seconds': 29}]

    sio_client.emit('whack', {'hole_id': hole['id']}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert first_args(received, 'hole_updated') == [{'id': hole['id'], 'handle': hole['handle'], 'has_mole': False}]
    assert first_args(received, 'score_updated')[0]['score'] == 1

    # second whack on the same hole changes nothing
    sio_client.emit('whack', {'hole_id': hole['id']}, namespace='/ws')
    assert sio_client.get_received('/ws') == []
    assert game.state.score == 1


def test_whack_with_bad_ids_is_ignored(sio_client, game):
    sio_client.emit('start_game', namespace='/ws')
    game.state.add_mole(0)
    sio_client.get_received('/ws')
    for bad in (-1, 12, 'nope', None, 3.5):
        sio_client.emit('whack', {'hole_id': bad}, namespace='/ws')
    assert sio_client.get_received('/ws') == []
    assert game.state.score == 0


def test_whack_without_hole_id_reports_error(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('whack', {}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert first_args(received, 'error') == [{'message': 'hole_id is required'}]


def test_round_over_fires_once(sio_client, game):
    sio_client.emit('start_game', namespace='/ws')
    sio_client.get_received('/ws')
    game.scheduler.advance(30)
    game.scheduler.advance(5)
    received = sio_client.get_received('/ws')
    assert first_args(received, 'round_over') == [{'score': 0, 'message': 'Time is up !!!'}]
    assert names(received)[-1] == 'round_over'


def test_all_clients_see_broadcasts(flask_app, sio_client, game):
    from molegame import socketio as _sio
    other = _sio.test_client(flask_app, namespace='/ws')
    other.get_received('/ws')
    sio_client.get_received('/ws')

    sio_client.emit('start_game', namespace='/ws')
    assert 'board_reset' in names(other.get_received('/ws'))
    other.disconnect(namespace='/ws')
