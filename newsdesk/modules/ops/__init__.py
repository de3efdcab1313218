"""
Ops Module
==========

Public /health endpoint for uptime monitors (no auth) and the admin-only
/ops/errors feed over the stored error logs.
"""

from flask import Blueprint

ops_health_bp = Blueprint('ops_health', __name__, url_prefix='/health')
ops_admin_bp = Blueprint('ops_admin', __name__, url_prefix='/ops')

from . import routes

__all__ = ['ops_health_bp', 'ops_admin_bp']
