from flask import jsonify, request

from . import upload_bp
from ..auth import token_required
from ...core.errors import UploadFailure, ValidationError
from ...core.logging_service import LoggingService
from ...core.storage import upload_file

FILE_FIELD = 'image'


@upload_bp.route('', methods=['POST'])
@token_required
def upload_image():
    """Relay one uploaded file to blob storage and return its URL"""
    file = request.files.get(FILE_FIELD)
    if file is None and request.files:
        # Any other field name is accepted too
        file = next(iter(request.files.values()))

    if file is None:
        raise ValidationError(f'No file provided (field: {FILE_FIELD})')

    try:
        url = upload_file(file.read(), file.filename, file.mimetype)
    except UploadFailure as e:
        LoggingService.error('upload', 'Upload failed', {
            'filename': file.filename,
            'error': e.message,
        })
        raise UploadFailure()

    LoggingService.log_user_action(
        'upload', 'image uploaded',
        user_id=request.token_claims.get('sub'),
        details={'url': url},
    )
    return jsonify({'ok': True, 'url': url})
