from __future__ import annotations

import logging
from collections import OrderedDict
from threading import Lock

import requests

from .words import WORD_SET


logger = logging.getLogger(__name__)


class WordOracle:
    """Answers "is this a real word?".

    The bundled corpus is consulted first, then the remote dictionary API.
    Any remote failure counts as "not a word" so a flaky API can only cost
    the player a retry, never crash a room.
    """

    def __init__(
        self,
        api_url: str = "",
        timeout: float = 5.0,
        corpus: frozenset[str] = WORD_SET,
        session: requests.Session | None = None,
        cache_size: int = 2048,
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self.corpus = corpus
        self.session = session or requests.Session()
        self.cache_size = cache_size
        self._cache: OrderedDict[str, bool] = OrderedDict()
        self._lock = Lock()

    @classmethod
    def from_config(cls, config) -> "WordOracle":
        return cls(
            api_url=config.get("DICTIONARY_API_URL", ""),
            timeout=float(config.get("DICTIONARY_API_TIMEOUT_SEC", 5)),
        )

    def is_valid(self, word: str) -> bool:
        w = (word or "").strip().lower()
        if len(w) < 3 or not w.isalpha():
            return False
        if w in self.corpus:
            return True

        with self._lock:
            cached = self._cache.get(w)
        if cached is not None:
            return cached

        if not self.api_url:
            return False

        valid = self._lookup_remote(w)
        if valid is None:
            # Transient failure: answer no, but ask again next time.
            return False
        with self._lock:
            self._cache[w] = valid
            self._cache.move_to_end(w)
            while len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)
        return valid

    def _lookup_remote(self, word: str) -> bool | None:
        url = self.api_url.format(word=word)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("[oracle] lookup failed word=%s: %s", word, exc)
            return None

        if response.status_code == 404:
            return False
        if not response.ok:
            logger.warning("[oracle] lookup failed word=%s status=%s", word, response.status_code)
            return None
        try:
            data = response.json()
        except ValueError:
            logger.warning("[oracle] undecodable response word=%s", word)
            return None
        return isinstance(data, list) and len(data) > 0
