from conftest import create_match, register_user


def test_create_match_initial_state(client, owner_id):
    data = create_match(client, timer_duration=2700)
    assert data['team1_score'] == 0
    assert data['team2_score'] == 0
    assert data['current_half'] == 1
    assert data['current_time'] == 0
    assert data['is_timer_running'] is False
    assert data['half_time_offset'] == 0
    assert data['is_visible'] is True
    assert data['is_active'] is True
    assert data['user_id'] == owner_id
    assert data['display_clock'] == '00:00'


def test_create_requires_login(client):
    res = client.post('/api/matches', json={'team1_name': 'A', 'team2_name': 'B', 'timer_duration': 900})
    assert res.status_code == 401


def test_create_requires_confirmed_payment(flask_app, client):
    register_user(flask_app, client, confirmed=False)
    res = client.post('/api/matches', json={'team1_name': 'A', 'team2_name': 'B', 'timer_duration': 900})
    assert res.status_code == 403
    assert res.get_json()['success'] is False


def test_create_validates_input(client, owner_id):
    base = {'team1_name': 'A', 'team2_name': 'B', 'timer_duration': 900, 'design_theme': 'classic'}
    for override in ({'team1_name': ''}, {'timer_duration': 'soon'}, {'timer_duration': 30},
                     {'design_theme': 'neon'}, {'team2_name': None}):
        res = client.post('/api/matches', json={**base, **override})
        assert res.status_code == 400, override


def test_get_match_is_public(flask_app, match):
    anonymous = flask_app.test_client()
    res = anonymous.get(f"/api/matches/{match['id']}")
    assert res.status_code == 200
    assert res.get_json()['data']['team1_name'] == 'Dynamo'


def test_get_unknown_match(client):
    assert client.get('/api/matches/999').status_code == 404


def test_my_matches_lists_only_active(client, owner_id):
    first = create_match(client)
    second = create_match(client, team1_name='Karpaty')
    assert client.delete(f"/api/matches/{first['id']}").status_code == 200
    listed = client.get('/api/matches/my').get_json()['data']
    assert [m['id'] for m in listed] == [second['id']]
    assert client.get(f"/api/matches/{first['id']}").status_code == 404


def test_set_score_clamps_negative_values(client, match):
    res = client.put(f"/api/matches/{match['id']}/score", json={'team1_score': 3, 'team2_score': -1})
    assert res.status_code == 200
    data = client.get(f"/api/matches/{match['id']}").get_json()['data']
    assert (data['team1_score'], data['team2_score']) == (3, 0)


def test_set_score_rejects_non_integers(client, match):
    res = client.put(f"/api/matches/{match['id']}/score", json={'team1_score': 'two', 'team2_score': 1})
    assert res.status_code == 400
    res = client.put(f"/api/matches/{match['id']}/score", json={'team1_score': True, 'team2_score': 1})
    assert res.status_code == 400


def test_out_of_range_integers_are_rejected(client, match):
    res = client.put(f"/api/matches/{match['id']}/score", json={'team1_score': 10**20, 'team2_score': 1})
    assert res.status_code == 400
    assert res.get_json()['success'] is False
    res = client.post(f"/api/matches/{match['id']}/timer/adjust", json={'delta': -10**20})
    assert res.status_code == 400
    data = client.get(f"/api/matches/{match['id']}").get_json()['data']
    assert (data['team1_score'], data['current_time']) == (0, 0)


def test_non_object_bodies_are_rejected(flask_app, client, match):
    assert client.put(f"/api/matches/{match['id']}/score", json=[1, 2]).status_code == 400
    assert client.post('/api/matches', json=[1]).status_code == 400
    assert client.put(f"/api/matches/{match['id']}/team", json='Dynamo').status_code == 400
    assert client.post('/api/payments', json=['card']).status_code == 400
    assert client.post('/api/login', json=['owner@example.com']).status_code == 400
    res = flask_app.test_client().post('/api/admin/login', json=['admin@kstv.com'])
    assert res.status_code == 400
    assert res.get_json()['message'] == 'Request body must be a JSON object'


def test_set_timer_clamps_into_half(client, match):
    res = client.put(f"/api/matches/{match['id']}/timer", json={'current_time': 5000, 'is_timer_running': True})
    data = res.get_json()['data']
    assert data['current_time'] == 2700
    assert data['is_timer_running'] is True
    res = client.put(f"/api/matches/{match['id']}/timer", json={'current_time': -20, 'is_timer_running': False})
    data = res.get_json()['data']
    assert data['current_time'] == 0
    assert data['is_timer_running'] is False


def test_timer_commands(client, match):
    mid = match['id']
    assert client.post(f'/api/matches/{mid}/timer/start').get_json()['data']['is_timer_running'] is True
    assert client.post(f'/api/matches/{mid}/timer/adjust', json={'delta': 60}).get_json()['data']['current_time'] == 60
    assert client.post(f'/api/matches/{mid}/timer/adjust', json={'delta': -10}).get_json()['data']['current_time'] == 50
    paused = client.post(f'/api/matches/{mid}/timer/pause').get_json()['data']
    assert paused['is_timer_running'] is False
    assert paused['current_time'] == 50
    reset = client.post(f'/api/matches/{mid}/timer/reset').get_json()['data']
    assert reset['current_time'] == 0
    assert client.post(f'/api/matches/{mid}/timer/adjust', json={}).status_code == 400


def test_switch_half_derives_offset(client, match):
    mid = match['id']
    client.put(f'/api/matches/{mid}/timer', json={'current_time': 2700, 'is_timer_running': False})
    # Client-supplied time/offset are ignored in favour of the half switch rules
    res = client.put(f'/api/matches/{mid}/half', json={
        'current_half': 2, 'current_time': 99, 'half_time_offset': 5, 'is_timer_running': True,
    })
    data = res.get_json()['data']
    assert data['current_half'] == 2
    assert data['current_time'] == 0
    assert data['half_time_offset'] == 2700
    assert data['is_timer_running'] is False
    assert data['display_time'] == 2700
    assert data['display_clock'] == '45:00'
    assert client.put(f'/api/matches/{mid}/half', json={'current_half': 3}).status_code == 400


def test_visibility_team_and_settings(client, match):
    mid = match['id']
    assert client.put(f'/api/matches/{mid}/visibility', json={'is_visible': False}).get_json()['data']['is_visible'] is False
    data = client.put(f'/api/matches/{mid}/team', json={
        'team1_name': 'Zorya', 'team2_logo_url': 'https://example.com/logo.png', 'user_id': 42,
    }).get_json()['data']
    assert data['team1_name'] == 'Zorya'
    assert data['team2_logo_url'] == 'https://example.com/logo.png'
    assert data['user_id'] != 42
    assert client.put(f'/api/matches/{mid}/team', json={'foo': 'bar'}).status_code == 400

    client.put(f'/api/matches/{mid}/timer', json={'current_time': 1500, 'is_timer_running': True})
    data = client.put(f'/api/matches/{mid}/settings', json={'timer_duration': 1200}).get_json()['data']
    assert data['timer_duration'] == 1200
    assert data['current_time'] == 1200
    assert client.put(f'/api/matches/{mid}/settings', json={'timer_duration': 10}).status_code == 400


def test_only_owner_can_control(flask_app, match):
    intruder = flask_app.test_client()
    register_user(flask_app, intruder, email='intruder@example.com', name='Intruder')
    mid = match['id']
    assert intruder.put(f'/api/matches/{mid}/score', json={'team1_score': 9, 'team2_score': 9}).status_code == 403
    assert intruder.post(f'/api/matches/{mid}/timer/start').status_code == 403
    assert intruder.delete(f'/api/matches/{mid}').status_code == 403
    data = intruder.get(f'/api/matches/{mid}').get_json()['data']
    assert data['team1_score'] == 0
    assert data['is_timer_running'] is False


def test_login_logout_and_me(flask_app, client):
    register_user(flask_app, client, confirmed=False)
    assert client.get('/api/users/me').get_json()['data']['email'] == 'owner@example.com'
    assert client.post('/api/logout').status_code == 200
    assert client.get('/api/users/me').status_code == 401
    assert client.post('/api/login', json={'email': 'owner@example.com', 'password': 'nope'}).status_code == 401
    res = client.post('/api/login', json={'email': 'OWNER@example.com', 'password': 'secret1'})
    assert res.status_code == 200
    assert client.post('/api/register', json={'email': 'owner@example.com', 'name': 'Again', 'password': 'secret1'}).status_code == 400
