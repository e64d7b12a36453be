import io
import os

PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 64


def _upload(client, data=PNG_BYTES, filename='scan.png', mimetype='image/png'):
    return client.post('/api/admin/upload',
                       data={'file': (io.BytesIO(data), filename, mimetype)},
                       content_type='multipart/form-data')


def test_upload_image_and_serve_it(app, auth_client):
    r = _upload(auth_client)
    assert r.status_code == 200
    data = r.get_json()['data']
    assert data['filename'].endswith('.png')
    assert data['url'] == f"/uploads/{data['filename']}"
    assert os.path.isfile(os.path.join(app.config['UPLOAD_FOLDER'], data['filename']))

    served = auth_client.get(data['url'])
    assert served.status_code == 200
    assert served.data == PNG_BYTES
    served.close()


def test_upload_requires_auth(client):
    assert _upload(client).status_code == 401


def test_upload_without_file(auth_client):
    r = auth_client.post('/api/admin/upload', data={'caption': 'x'},
                         content_type='multipart/form-data')
    assert r.status_code == 400
    assert r.get_json()['error'] == 'No file provided'


def test_upload_rejects_non_image(auth_client):
    r = _upload(auth_client, data=b'hello', filename='notes.txt', mimetype='text/plain')
    assert r.status_code == 400
    assert r.get_json()['error'] == 'File must be an image'


def test_upload_rejects_large_file(app, auth_client):
    app.config['MAX_UPLOAD_BYTES'] = 1024 * 1024
    r = _upload(auth_client, data=b'\x00' * (1024 * 1024 + 1))
    assert r.status_code == 400
    assert r.get_json()['error'] == 'File size must be less than 1MB'


def test_delete_upload(app, auth_client):
    filename = _upload(auth_client).get_json()['data']['filename']

    r = auth_client.delete(f'/api/admin/upload/{filename}')
    assert r.status_code == 200
    assert not os.path.exists(os.path.join(app.config['UPLOAD_FOLDER'], filename))

    r = auth_client.delete(f'/api/admin/upload/{filename}')
    assert r.status_code == 404
    assert r.get_json()['error'] == 'File not found'


def test_delete_upload_cannot_escape_folder(auth_client):
    r = auth_client.delete('/api/admin/upload/../config.py')
    assert r.status_code == 404


def test_upload_rejects_html_disguised_as_image(app, auth_client):
    r = _upload(auth_client, data=b'<script>alert(1)</script>', filename='x.html',
                mimetype='image/png')
    assert r.status_code == 400
    assert r.get_json()['error'] == 'File must be an image'
    folder = app.config['UPLOAD_FOLDER']
    assert not os.path.isdir(folder) or os.listdir(folder) == []


def test_upload_rejects_missing_extension(auth_client):
    r = _upload(auth_client, filename='scan', mimetype='image/png')
    assert r.status_code == 400


def test_uploaded_jpeg_is_served_as_image(auth_client):
    data = _upload(auth_client, data=b'\xff\xd8\xff' + b'\x00' * 16, filename='Photo.JPG',
                   mimetype='image/jpeg').get_json()['data']
    assert data['filename'].endswith('.jpg')
    served = auth_client.get(data['url'])
    assert served.mimetype == 'image/jpeg'
    served.close()
