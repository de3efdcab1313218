"""
Upload Module
=============

POST /upload (bearer token) - stores one image in blob storage.
"""

from flask import Blueprint

upload_bp = Blueprint('upload', __name__, url_prefix='/upload')

from . import routes

__all__ = ['upload_bp']
