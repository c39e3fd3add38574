def _events(sio_client, name):
    return [event['args'][0] for event in sio_client.get_received() if event['name'] == name]


def test_socket_round_flow(sio_client, game_service):
    sio_client.emit('start_round', {'player_id': 'kid1', 'length': 3})
    states = _events(sio_client, 'round_state')
    assert states and states[-1]['state']['word_length'] == 3

    target = game_service.get_engine('kid1').round.target
    sio_client.emit('submit_guess', {'player_id': 'kid1', 'guess': target})
    results = _events(sio_client, 'guess_result')
    assert results[-1]['accepted'] is True
    assert results[-1]['state']['phase'] == 'solved'

    sio_client.emit('get_stats', {'player_id': 'kid1'})
    stats = _events(sio_client, 'stats')
    assert stats[-1]['wins_today'] == 1


def test_socket_errors(sio_client):
    sio_client.emit('submit_guess', {'player_id': 'kid1', 'guess': 'CAT'})
    errors = _events(sio_client, 'error')
    assert errors[-1]['error'] == 'No round in progress'

    sio_client.emit('start_round', {'player_id': 'kid1', 'length': 9})
    errors = _events(sio_client, 'error')
    assert 'Word length' in errors[-1]['error']


def test_socket_hint_and_retry_errors(sio_client):
    sio_client.emit('start_round', {'player_id': 'kid1', 'length': 5})
    sio_client.get_received()

    sio_client.emit('reveal_hint', {'player_id': 'kid1', 'index': 2})
    states = _events(sio_client, 'round_state')
    assert states[-1]['state']['revealed_hints'] == [False, False, True, False, False]

    sio_client.emit('accept_bonus_retry', {'player_id': 'kid1'})
    errors = _events(sio_client, 'error')
    assert errors[-1]['error'] == 'No bonus retry is available for this round'


def test_socket_non_object_payload(sio_client):
    sio_client.emit('submit_guess', ['APPLE'])
    errors = _events(sio_client, 'error')
    assert errors[-1]['error'] == 'Guess is required'
