"""
Newsdesk Modules
================

Flask blueprints: auth (login), news, upload, ops (health, error feed).
"""

__all__ = ['auth', 'news', 'upload', 'ops']
