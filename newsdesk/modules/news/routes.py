"""
News Routes
===========

GET  /news  - public merged list, newest first
POST /news  - admin only, creates one item
"""

from flask import current_app, jsonify, request

from . import news_bp
from ..auth import token_required
from ...core.body import read_json_body
from ...core.logging_service import LoggingService


def get_repository():
    return current_app.extensions['newsdesk'].repository


@news_bp.route('', methods=['GET'])
def list_news():
    """Public news listing"""
    return jsonify({'ok': True, 'news': get_repository().list_all()})


@news_bp.route('', methods=['POST'])
@token_required
def create_news():
    """Create a news item"""
    data = read_json_body()

    item = get_repository().add(
        data.get('text'),
        source=data.get('source'),
        image_url=data.get('imageUrl'),
    )

    LoggingService.log_user_action(
        'news', 'news created',
        user_id=request.token_claims.get('sub'),
        details={'id': item['id']},
    )
    return jsonify({'ok': True, 'item': item}), 201
