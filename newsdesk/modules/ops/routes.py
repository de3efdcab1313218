from flask import jsonify, request

from . import ops_health_bp, ops_admin_bp
from ..auth import token_required
from ...core.logging_service import LoggingService

MAX_ERRORS = 200


@ops_health_bp.route('/')
@ops_health_bp.route('')
def health_check():
    """Public health endpoint for uptime monitors."""
    return jsonify({'ok': True, 'status': 'up'})


@ops_admin_bp.route('/errors', methods=['GET'])
@token_required
def api_errors():
    """Recent errors from app_logs for the error feed."""
    limit = request.args.get('limit', 50, type=int)
    limit = max(1, min(limit, MAX_ERRORS))
    errors = LoggingService.recent(limit=limit, level='ERROR')
    return jsonify({'ok': True, 'errors': errors, 'count': len(errors)})
