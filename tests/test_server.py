import json

import pytest

from runbench.server import create_app


@pytest.fixture
def app():
    return create_app({'TESTING': True})


@pytest.fixture
def client(app):
    return app.test_client()


def test_health(client):
    resp = client.get('/health')

    assert resp.status_code == 200
    data = resp.get_json()
    assert data['status'] == 'ok'
    assert isinstance(data['timestamp'], int)


def test_hello_is_plain_text(client):
    resp = client.get('/hello')

    assert resp.status_code == 200
    assert resp.mimetype == 'text/plain'
    assert resp.get_data(as_text=True) == 'Hello World!'


def test_json_payload(client):
    data = client.get('/json').get_json()

    assert data['message'] == 'Hello World!'
    assert len(data['data']) == 100
    assert data['data'][7] == {'id': 7, 'value': 'item-7'}


def test_cpu_route(client):
    data = client.get('/cpu/10').get_json()

    assert data['input'] == 10
    assert data['result'] == 55
    assert data['time_ms'] >= 0


def test_cpu_route_falls_back_on_bad_parameter(client, monkeypatch):
    monkeypatch.setattr('runbench.server.DEFAULT_CPU_N', 12)

    data = client.get('/cpu/abc').get_json()

    assert data['input'] == 12
    assert data['result'] == 144


def test_post_data_object(client):
    body = {'a': 1, 'b': [1, 2, 3]}

    data = client.post('/data', json=body).get_json()

    assert data['received_count'] == 2
    assert data['summary'] == len(json.dumps(body, separators=(',', ':')))
    assert isinstance(data['processed_at'], int)


def test_post_data_array(client):
    data = client.post('/data', json=[1, 2, 3, 4]).get_json()

    assert data['received_count'] == 4


def test_post_data_rejects_invalid_body(client):
    resp = client.post('/data', data='not json', content_type='application/json')

    assert resp.status_code == 400
    assert 'error' in resp.get_json()
