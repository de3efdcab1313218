"""
Newsdesk Auth Module

Single-admin authentication:
- POST /login exchanges the configured username/password for a bearer token
- token_required guards every mutating route
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/login')

from . import routes
from .routes import token_required
from .tokens import authenticate, issue_token, verify_credentials, TOKEN_TTL

__all__ = ['auth_bp', 'token_required', 'authenticate', 'issue_token',
           'verify_credentials', 'TOKEN_TTL']
