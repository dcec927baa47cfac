from flask import Blueprint, request, jsonify
from alliance_manager.services.uploads import UploadTooLargeError, store_upload

uploads_bp = Blueprint('uploads', __name__)


@uploads_bp.route('', methods=['POST'])
def upload_file():
    upload = request.files.get('file')
    if upload is None or not upload.filename:
        return jsonify({'error': 'No file provided'}), 400
    try:
        url = store_upload(upload)
    except UploadTooLargeError as exc:
        return jsonify({'error': str(exc)}), 413
    return jsonify({'url': url})
