"""
News Repository
===============

Two stores, one view:

- an in-process cache that every write lands in first (guaranteed), and
- a durable JSON document that writes reach on a best-effort basis.

``list_all`` merges them at read time: cache entries shadow durable entries
with the same id, and the result is ordered newest first. The stores are
never reconciled with each other.

A news item is a plain dict::

    {
        "id": "n_3f9c2a1bmf0x1k2z",
        "text": "...",
        "source": "",
        "imageUrl": "",
        "createdAt": "2026-10-17T09:30:00.123Z"
    }
"""

import json
import os
import tempfile
import threading
import time
import uuid
from datetime import datetime, timezone

from ...core.errors import ValidationError
from ...core.logging_service import LoggingService

_BASE36 = '0123456789abcdefghijklmnopqrstuvwxyz'


def _base36(number):
    if number == 0:
        return '0'
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return ''.join(reversed(digits))


def make_id():
    """"n_" + 8 random hex chars + base36 epoch millis."""
    return 'n_' + uuid.uuid4().hex[:8] + _base36(int(time.time() * 1000))


def utc_now_iso():
    """Current instant as 2026-10-17T09:30:00.123Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _clean(value):
    # Falsy values become "", everything else its string form
    return str(value or '').strip()


def _sort_key(item):
    """Epoch seconds of createdAt; unparseable dates sort last."""
    value = item.get('createdAt')
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return float('-inf')
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.timestamp()
    return float('-inf')


def merge_news(cache_items, durable_items):
    """Cache first, first id wins, newest first."""
    seen = set()
    merged = []

    for item in list(cache_items) + list(durable_items):
        if not isinstance(item, dict):
            continue
        item_id = item.get('id')
        # Ids are non-empty strings; anything else in the file is junk
        if not isinstance(item_id, str) or not item_id or item_id in seen:
            continue
        seen.add(item_id)
        merged.append(item)

    # Stable: equal timestamps keep merge order
    merged.sort(key=_sort_key, reverse=True)
    return merged


class JsonFileStore:
    """Durable news document: ``{"news": [NewsItem, ...]}`` on disk."""

    def __init__(self, path):
        self.path = path

    def load(self):
        """Whole sequence, or [] when missing, unreadable or malformed."""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                parsed = json.load(f)
        except (OSError, ValueError):
            return []

        news = parsed.get('news') if isinstance(parsed, dict) else None
        return news if isinstance(news, list) else []

    def save(self, items):
        """Overwrite the whole document. Raises on any failure."""
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(prefix='.news-', suffix='.json', dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump({'news': list(items)}, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise


class NewsRepository:
    """Cache-over-store news repository.

    Args:
        store: durable provider with ``load()`` and ``save(items)``.
        write_async: run the durable write on a daemon thread.
        max_cache_items: drop the oldest cache entries past this count.
            None keeps everything for the life of the process.

    Raises:
        ValueError: max_cache_items is set but below 1.
    """

    def __init__(self, store, write_async=False, max_cache_items=None):
        if max_cache_items is not None and max_cache_items < 1:
            raise ValueError(f"max_cache_items must be at least 1, got {max_cache_items!r}")
        self.store = store
        self.write_async = write_async
        self.max_cache_items = max_cache_items
        self._cache = []
        self._cache_lock = threading.Lock()
        self._store_lock = threading.Lock()

    def cache_snapshot(self):
        with self._cache_lock:
            return list(self._cache)

    def list_all(self):
        """Merged view of cache and durable store, newest first. Never fails."""
        durable = self._load_durable()
        return merge_news(self.cache_snapshot(), durable)

    def add(self, text, source='', image_url=''):
        """Create a news item, visible to list_all immediately.

        Raises:
            ValidationError: text is empty after trimming.
        """
        text = _clean(text)
        if not text:
            raise ValidationError('text is required')

        item = {
            'id': make_id(),
            'text': text,
            'source': _clean(source),
            'imageUrl': _clean(image_url),
            'createdAt': utc_now_iso(),
        }

        with self._cache_lock:
            self._cache.insert(0, item)
            if self.max_cache_items is not None and len(self._cache) > self.max_cache_items:
                del self._cache[self.max_cache_items:]

        if self.write_async:
            threading.Thread(
                target=self._persist, args=(item,),
                name=f"news-persist-{item['id']}", daemon=True,
            ).start()
        else:
            self._persist(item)

        return item

    def _load_durable(self):
        try:
            items = self.store.load()
        except Exception as e:
            LoggingService.warning('news', f"Durable store read failed: {e}")
            return []
        return items if isinstance(items, list) else []

    def _persist(self, item):
        """Prepend ``item`` to the durable store. Failures are logged only."""
        try:
            with self._store_lock:
                current = self._load_durable()
                self.store.save([item] + current)
        except Exception as e:
            LoggingService.warning(
                'news',
                'Durable store write failed; item kept in cache only',
                {'id': item['id'], 'error': f"{type(e).__name__}: {e}"},
            )
