"""
Centralized logging service for Newsdesk.
Provides structured logging with sqlite storage and console fallback.
"""

import sqlite3
import json
import os
import threading
from datetime import datetime
from flask import current_app, request, has_app_context, has_request_context


class LoggingService:
    """Centralized logging service for application-wide logging"""

    # Last path set by init_app; used outside an app context
    db_path = None
    _lock = threading.Lock()

    @classmethod
    def init_app(cls, app):
        """Point the service at the app's LOG_DB (empty disables storage)"""
        cls.db_path = app.config.get('LOG_DB') or None
        if cls.db_path:
            db_dir = os.path.dirname(cls.db_path)
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)

    @staticmethod
    def _ensure_logs_table(conn):
        """Ensure the app_logs table exists"""
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS app_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                level TEXT NOT NULL,
                source TEXT NOT NULL,
                message TEXT NOT NULL,
                details TEXT,
                ip_address TEXT,
                user_agent TEXT,
                request_path TEXT,
                user_id TEXT
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_logs_timestamp
            ON app_logs(timestamp DESC)
        """)

    @classmethod
    def _resolve_db_path(cls):
        """The active app's LOG_DB, else the one from the last init_app"""
        if has_app_context():
            return current_app.config.get('LOG_DB') or None
        return cls.db_path

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        try:
            ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
            if ip_address and ',' in ip_address:
                ip_address = ip_address.split(',')[0].strip()

            user_agent = request.headers.get('User-Agent', '')
            request_path = request.path

            return ip_address, user_agent, request_path
        except Exception:
            return None, None, None

    @staticmethod
    def _print(timestamp, level, source, message, details):
        print(f"[{timestamp}] [{level}] [{source}] {message}")
        if details:
            print(f"Details: {details}")

    @classmethod
    def log(cls, level, source, message, details=None, user_id=None):
        """
        Log a message. Never raises.

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR)
            source (str): Source component (auth, news, upload, app)
            message (str): Main log message
            details (str/dict): Additional details (JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        level = level.upper()
        timestamp = datetime.now().isoformat()

        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        db_path = cls._resolve_db_path()
        if not db_path:
            cls._print(timestamp, level, source, message, details)
            return

        try:
            ip_address, user_agent, request_path = cls._get_request_context()

            with cls._lock, sqlite3.connect(db_path) as conn:
                cls._ensure_logs_table(conn)
                conn.execute("""
                    INSERT INTO app_logs
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path, user_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    timestamp, level, source, message, details,
                    ip_address, user_agent, request_path, user_id
                ))
                conn.commit()

        except Exception as e:
            # Fallback to console logging if database fails
            cls._print(timestamp, level, source, message, details)
            print(f"Logging service error: {e}")

    @staticmethod
    def info(source, message, details=None, user_id=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log user actions (login, news created, upload)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        import traceback
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events (bad logins, rejected tokens)"""
        LoggingService.warning('security', message, details)

    @classmethod
    def recent(cls, limit=50, level=None):
        """Most recent stored entries, newest first. Empty when console only."""
        db_path = cls._resolve_db_path()
        if not db_path or not os.path.isfile(db_path):
            return []

        try:
            with sqlite3.connect(db_path) as conn:
                cls._ensure_logs_table(conn)
                cursor = conn.cursor()
                if level:
                    cursor.execute("""
                        SELECT timestamp, level, source, message, details
                        FROM app_logs WHERE level = ?
                        ORDER BY id DESC LIMIT ?
                    """, (level.upper(), limit))
                else:
                    cursor.execute("""
                        SELECT timestamp, level, source, message, details
                        FROM app_logs ORDER BY id DESC LIMIT ?
                    """, (limit,))
                return [{
                    'timestamp': row[0],
                    'level': row[1],
                    'source': row[2],
                    'message': row[3],
                    'details': row[4]
                } for row in cursor.fetchall()]
        except Exception as e:
            print(f"Error reading logs: {e}")
            return []

