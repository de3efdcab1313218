"""
News Module
===========

Public listing and admin creation of news items.

Provides:
- NewsRepository: cache-over-file merge with de-duplication
- JsonFileStore: the durable ``{"news": [...]}`` document
- news_bp: GET/POST /news
"""

from flask import Blueprint

news_bp = Blueprint('news', __name__, url_prefix='/news')

from . import routes
from .repository import NewsRepository, JsonFileStore, merge_news

__all__ = ['news_bp', 'NewsRepository', 'JsonFileStore', 'merge_news']
