"""
Tests for the Flask dump service.
"""

import io

import pytest

pytest.importorskip("flask")

from omf_dumper_py.config import Config
from omf_dumper_py.server import create_app

from omf_builders import sample_module


@pytest.fixture
def client():
    app = create_app(Config())
    app.config['TESTING'] = True
    return app.test_client()


def test_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    assert response.get_json()['status'] == 'ok'


def test_dump_multipart_upload(client):
    response = client.post(
        '/api/dump',
        data={'file': (io.BytesIO(sample_module()), 'test.obj')},
        content_type='multipart/form-data',
    )
    assert response.status_code == 200
    data = response.get_json()
    assert data['Filename'] == 'test.obj'
    assert data['Records'][0]['Fields'] == {'Name': 'TEST'}
    assert data['Error'] is None


def test_dump_raw_body(client):
    response = client.post('/api/dump', data=sample_module(),
                           content_type='application/octet-stream')
    assert response.status_code == 200
    assert len(response.get_json()['Records']) == 7


def test_malformed_file_returns_partial_result(client):
    response = client.post('/api/dump', data=sample_module()[:-2],
                           content_type='application/octet-stream')
    assert response.status_code == 422
    data = response.get_json()
    assert len(data['Records']) == 6
    assert data['Error'].startswith('record #6')


def test_no_input(client):
    response = client.post('/api/dump', data=b'', content_type='application/octet-stream')
    assert response.status_code == 400
