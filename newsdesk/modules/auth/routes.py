from functools import wraps
from flask import current_app, jsonify, request

from . import auth_bp
from .tokens import authenticate, verify_credentials
from ...core.errors import InvalidCredentials
from ...core.logging_service import LoggingService
from ...core.body import read_json_body


# ===== Authentication Decorator =====

def token_required(f):
    """Require a valid bearer token before the view touches the body"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        claims = authenticate(
            request.headers.get('Authorization'),
            current_app.config['JWT_SECRET'],
        )

        # Attach claims to request for use in route
        request.token_claims = claims
        return f(*args, **kwargs)

    return decorated_function


# ===== Routes =====

@auth_bp.route('', methods=['POST'])
def login():
    """Exchange the admin username/password for a bearer token"""
    body = read_json_body()
    username = body.get('username')
    password = body.get('password')

    config = current_app.config
    try:
        token = verify_credentials(
            username, password,
            config['ADMIN_USER'], config['ADMIN_PASSWORD'], config['JWT_SECRET'],
        )
    except InvalidCredentials:
        LoggingService.log_security_event(
            'Failed admin login',
            {'username': username if isinstance(username, str) else None},
        )
        raise

    LoggingService.log_user_action('auth', 'login', user_id=username)
    return jsonify({'ok': True, 'token': token})
