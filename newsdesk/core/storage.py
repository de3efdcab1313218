"""
Storage Utility
===============

Upload relay: pushes a single file to S3-compatible blob storage or the
local static folder and hands back its public URL.
"""

import os
import re
import time
import uuid
from flask import current_app

from .errors import UploadFailure

CONTENT_TYPES = {
    'jpg': 'image/jpeg', 'jpeg': 'image/jpeg',
    'png': 'image/png', 'gif': 'image/gif', 'webp': 'image/webp',
    'svg': 'image/svg+xml', 'avif': 'image/avif',
}


def safe_filename(name):
    """Keep [A-Za-z0-9._-], replace the rest with "_", cap at 120 chars."""
    base = re.sub(r'[^a-zA-Z0-9._-]', '_', str(name or 'image'))
    return base[:120]


def guess_content_type(filename, mimetype=None):
    if mimetype and mimetype != 'application/octet-stream':
        return mimetype
    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
    return CONTENT_TYPES.get(ext, 'application/octet-stream')


def build_object_key(filename, subfolder):
    """uploads/<epoch-ms>-<name>-<random>.<ext>"""
    name = safe_filename(filename)
    random_suffix = uuid.uuid4().hex[:8]
    if '.' in name:
        stem, ext = name.rsplit('.', 1)
        name = f"{stem}-{random_suffix}.{ext}"
    else:
        name = f"{name}-{random_suffix}"
    return f"{subfolder}/{int(time.time() * 1000)}-{name}"


def upload_file(file_bytes, filename, mimetype=None):
    """Upload file to cloud storage or local filesystem.

    Args:
        file_bytes: Raw bytes of the uploaded file.
        filename: Client-supplied filename (sanitised here).
        mimetype: Content type reported by the client, if any.

    Returns:
        Public URL (s3) or local path like "/static/uploads/..." (local).

    Raises:
        UploadFailure: empty file or any storage error.
    """
    if not file_bytes:
        raise UploadFailure('Empty file')

    config = current_app.config
    object_key = build_object_key(filename, config.get('UPLOAD_SUBFOLDER', 'uploads'))
    content_type = guess_content_type(safe_filename(filename), mimetype)

    try:
        if config.get('STORAGE_BACKEND', 'local') == 's3':
            return _upload_to_s3(file_bytes, object_key, content_type)
        return _save_locally(file_bytes, object_key)
    except UploadFailure:
        raise
    except Exception as e:
        raise UploadFailure(str(e)) from e


def _upload_to_s3(file_bytes, object_key, content_type):
    """Upload to an S3-compatible bucket via boto3."""
    import boto3
    config = current_app.config
    bucket = config.get('S3_BUCKET')
    if not bucket:
        raise UploadFailure('S3_BUCKET is not configured')

    region = config.get('S3_REGION')
    endpoint_url = config.get('S3_ENDPOINT_URL')

    client = boto3.client(
        's3',
        region_name=region,
        endpoint_url=endpoint_url,
        aws_access_key_id=config.get('S3_ACCESS_KEY'),
        aws_secret_access_key=config.get('S3_SECRET_KEY'),
    )

    client.put_object(
        Bucket=bucket,
        Key=object_key,
        Body=file_bytes,
        ACL='public-read',
        ContentType=content_type,
    )

    public_base = config.get('S3_PUBLIC_BASE_URL')
    if public_base:
        return f"{public_base.rstrip('/')}/{object_key}"
    if endpoint_url:
        return f"{endpoint_url.rstrip('/')}/{bucket}/{object_key}"
    return f"https://{bucket}.s3.{region}.amazonaws.com/{object_key}"


def _save_locally(file_bytes, object_key):
    """Save to local static folder."""
    filepath = os.path.join(current_app.static_folder, *object_key.split('/'))
    os.makedirs(os.path.dirname(filepath), exist_ok=True)
    with open(filepath, 'wb') as f:
        f.write(file_bytes)
    return f"/static/{object_key}"
