"""Tests for the upload endpoint and its storage fallbacks."""
import base64
import io
import json
import os


def _upload(client, payload=b'\x89PNG fake image bytes', filename='armament.png',
            content_type='image/png'):
    return client.post(
        '/api/upload',
        data={'file': (io.BytesIO(payload), filename, content_type)},
        content_type='multipart/form-data',
    )


def test_upload_without_storage_returns_data_url(client):
    res = _upload(client)
    assert res.status_code == 200
    url = json.loads(res.data)['url']
    assert url.startswith('data:image/png;base64,')
    assert base64.b64decode(url.split(',', 1)[1]) == b'\x89PNG fake image bytes'


def test_upload_requires_file(client):
    res = client.post('/api/upload', data={}, content_type='multipart/form-data')
    assert res.status_code == 400


def test_upload_rejects_oversized_file(app, client):
    app.config['UPLOAD_MAX_BYTES'] = 8
    res = _upload(client, payload=b'0123456789')
    assert res.status_code == 413


def test_upload_to_folder_is_served(app, client, tmp_path):
    app.config['UPLOAD_FOLDER'] = str(tmp_path)
    res = _upload(client, payload=b'stored bytes', filename='../../evil name.PNG')
    assert res.status_code == 200
    url = json.loads(res.data)['url']
    assert '/uploads/' in url
    stored_name = url.rsplit('/', 1)[1]
    assert stored_name.endswith('.png')
    assert os.listdir(tmp_path) == [stored_name]

    served = client.get(f'/uploads/{stored_name}')
    assert served.status_code == 200
    assert served.data == b'stored bytes'


def test_upload_uses_public_base_url(app, client, tmp_path):
    app.config['UPLOAD_FOLDER'] = str(tmp_path)
    app.config['PUBLIC_UPLOAD_BASE_URL'] = 'https://cdn.example.com/armaments/'
    url = json.loads(_upload(client).data)['url']
    assert url.startswith('https://cdn.example.com/armaments/')
    assert url.endswith('.png')


def test_uploaded_url_can_be_attached_to_set(client, sample_player):
    url = json.loads(_upload(client).data)['url']
    base = f'/api/players/{sample_player.id}/equipment'
    client.get(base)
    res = client.patch(f'{base}/1', json={'armament_image_url': url})
    assert json.loads(res.data)['equipment_set']['armament_image_url'] == url
