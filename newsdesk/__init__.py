"""
Newsdesk - A Flask news-posting backend
=======================================

A single administrator logs in, posts short news items and uploads images;
everybody else reads the merged news list.

Usage:
    from flask import Flask
    from newsdesk import Newsdesk

    app = Flask(__name__)
    Newsdesk(app, {'API_PREFIX': '/api'})

or simply ``app = create_app()``.
"""

__version__ = '0.1.0'

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound as RouteNotFound

from .core.config import Config
from .core.errors import NewsdeskError, NotFound
from .core.logging_service import LoggingService
from .modules.auth import auth_bp
from .modules.news import news_bp, NewsRepository, JsonFileStore
from .modules.ops import ops_health_bp, ops_admin_bp
from .modules.upload import upload_bp

MODULES = [
    ('ops', ops_health_bp),
    ('auth', auth_bp),
    ('news', news_bp),
    ('upload', upload_bp),
    ('ops_admin', ops_admin_bp),
]


class Newsdesk:
    """Flask extension that wires config, logging, CORS, the news
    repository and every blueprint into an app."""

    def __init__(self, app=None, config=None):
        self._config = dict(config or {})
        self._registered_modules = []
        self.repository = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        for key in Config.KEYS:
            app.config.setdefault(key, getattr(Config, key))
        app.config.update(self._config)

        LoggingService.init_app(app)

        if app.config['JWT_SECRET'] == Config.DEFAULT_JWT_SECRET:
            LoggingService.warning('app', 'JWT_SECRET is the development default; set it in production')

        self.repository = NewsRepository(
            JsonFileStore(app.config['DATA_PATH']),
            write_async=app.config['NEWS_WRITE_ASYNC'],
            max_cache_items=app.config['NEWS_CACHE_MAX_ITEMS'],
        )

        CORS(
            app,
            resources={r'/*': {'origins': '*'}},
            send_wildcard=True,
            methods=['GET', 'POST', 'OPTIONS'],
            allow_headers=['Content-Type', 'Authorization'],
        )
        app.before_request(_preflight)

        prefix = (app.config.get('API_PREFIX') or '').rstrip('/')
        for name, blueprint in MODULES:
            app.register_blueprint(blueprint, url_prefix=prefix + blueprint.url_prefix)
            self._registered_modules.append(name)

        _register_error_handlers(app)

        app.extensions['newsdesk'] = self

    def get_registered_modules(self):
        return list(self._registered_modules)


def _preflight():
    # Every OPTIONS request is a CORS preflight: empty 204
    if request.method == 'OPTIONS':
        return '', 204
    return None


def _error_response(message, status):
    return jsonify({'ok': False, 'error': message}), status


def _register_error_handlers(app):
    @app.errorhandler(NewsdeskError)
    def handle_newsdesk_error(e):
        return _error_response(e.message, e.status_code)

    @app.errorhandler(RouteNotFound)
    @app.errorhandler(MethodNotAllowed)
    def handle_not_found(e):
        return _error_response(NotFound.default_message, NotFound.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return _error_response(e.name, e.code)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        LoggingService.log_error_with_traceback('app', e, {'path': request.path})
        return _error_response(NewsdeskError.default_message, 500)


def create_app(config=None):
    """Build a ready-to-serve Flask app."""
    app = Flask(__name__)
    Newsdesk(app, config)
    return app


__all__ = ['Newsdesk', 'create_app', 'Config', 'NewsRepository', 'JsonFileStore']
