import os
import sys

import pytest
from fastapi.testclient import TestClient

from conftest import build_manifest, build_zip, mark_encrypted

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'web')))

from app import app  # noqa: E402


@pytest.fixture
def client():
    return TestClient(app)


def test_home_renders_upload_form(client):
    response = client.get('/')

    assert response.status_code == 200
    assert 'enctype="multipart/form-data"' in response.text


def test_health(client):
    assert client.get('/health').json() == {'status': 'ok'}


def test_verify_upload_returns_camel_case_result(client):
    data = build_zip({
        'manifest.json': build_manifest(host_permissions=['https://*/*']),
        'bg.js': "chrome.scripting.executeScript({})",
    })

    response = client.post('/verify', files={'file': ('ext.zip', data, 'application/zip')})

    assert response.status_code == 200
    body = response.json()
    assert body['totalFiles'] == 2
    assert body['hostPermissions'] == ['https://*/*']
    assert [c['status'] for c in body['checks']] == [
        'success', 'success', 'success', 'warning', 'success', 'warning', 'success',
    ]


def test_verify_bad_archive_reports_error_in_band(client):
    response = client.post('/verify', files={'file': ('x.zip', b'nope', 'application/zip')})

    assert response.status_code == 200
    assert response.json()['errors'][0].startswith('Unable to load the zip file.')


def test_verify_empty_upload_rejected(client):
    response = client.post('/verify', files={'file': ('x.zip', b'', 'application/zip')})

    assert response.status_code == 400


def test_verify_encrypted_manifest_reports_error_in_band(client):
    data = mark_encrypted(build_zip({'manifest.json': build_manifest()}), 'manifest.json')

    response = client.post('/verify', files={'file': ('x.zip', data, 'application/zip')})

    assert response.status_code == 200
    body = response.json()
    assert body['checks'][1]['status'] == 'error'
    assert body['errors'][0].startswith('Invalid manifest.json file.')
