"""Store uploaded screenshots and hand back a URL the frontend can display.

With ``UPLOAD_FOLDER`` configured files are written to disk and served from
``/uploads/<name>``. Without it the file is returned inline as a data URL.
"""
import base64
import mimetypes
import os
import uuid

from flask import current_app, url_for
from werkzeug.utils import secure_filename


class UploadTooLargeError(ValueError):
    pass


def _mimetype_for(file_storage):
    mimetype = (file_storage.mimetype or '').strip()
    if mimetype:
        return mimetype
    guessed, _ = mimetypes.guess_type(file_storage.filename or '')
    return guessed or 'application/octet-stream'


def _read_limited(file_storage, max_bytes):
    data = file_storage.stream.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise UploadTooLargeError(f'File exceeds {max_bytes} bytes')
    return data


def to_data_url(data, mimetype):
    encoded = base64.b64encode(data).decode('ascii')
    return f'data:{mimetype};base64,{encoded}'


def _stored_name(original_name):
    safe = secure_filename(original_name or '') or 'upload'
    _, ext = os.path.splitext(safe)
    return f'{uuid.uuid4().hex}{ext.lower()}'


def _public_url(stored_name):
    base_url = str(current_app.config.get('PUBLIC_UPLOAD_BASE_URL') or '').strip().rstrip('/')
    if base_url:
        return f'{base_url}/{stored_name}'
    return url_for('uploaded_file', filename=stored_name, _external=True)


def store_upload(file_storage):
    """Persist one uploaded file and return its public URL."""
    max_bytes = int(current_app.config.get('UPLOAD_MAX_BYTES') or 5 * 1024 * 1024)
    data = _read_limited(file_storage, max_bytes)
    mimetype = _mimetype_for(file_storage)

    upload_folder = str(current_app.config.get('UPLOAD_FOLDER') or '').strip()
    if not upload_folder:
        return to_data_url(data, mimetype)

    os.makedirs(upload_folder, exist_ok=True)
    stored_name = _stored_name(file_storage.filename)
    with open(os.path.join(upload_folder, stored_name), 'wb') as handle:
        handle.write(data)
    current_app.logger.info('Stored upload %s (%s bytes)', stored_name, len(data))
    return _public_url(stored_name)
