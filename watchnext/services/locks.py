"""
Verrous par clé pour sérialiser les mutations du flux.

Deux réconciliations du même contenu ne doivent pas entrelacer leur
séquence lecture-puis-écriture ; les contenus différents avancent en parallèle.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


def content_key(content_id: str) -> str:
    """Clé de verrou d'un contenu."""
    return f"content:{content_id}"


def series_key(series_id: str) -> str:
    """Clé de verrou d'une série."""
    return f"series:{series_id}"


class KeyedLock:
    """
    Dictionnaire de verrous indexé par clé.

    Les verrous sont créés à la demande et libérés quand plus aucun thread
    ne les détient ni ne les attend.

    Utilisation:
        locks = KeyedLock()
        with locks.hold(series_key("s1"), content_key("v1")):
            ...
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._users: dict[str, int] = {}

    def _acquire_entry(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            self._users[key] = self._users.get(key, 0) + 1
            return lock

    def _release_entry(self, key: str) -> None:
        with self._guard:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    @contextmanager
    def hold(self, *keys: str) -> Iterator[None]:
        """
        Détient les verrous des clés données.

        Les clés sont acquises dans l'ordre lexicographique pour qu'aucun
        interblocage ne survienne entre deux appels partageant des clés.
        """
        ordered = sorted(set(keys))
        held: list[tuple[str, threading.Lock]] = []
        try:
            for key in ordered:
                lock = self._acquire_entry(key)
                try:
                    lock.acquire()
                except BaseException:
                    self._release_entry(key)
                    raise
                held.append((key, lock))
            yield
        finally:
            for key, lock in reversed(held):
                lock.release()
                self._release_entry(key)

    def active_keys(self) -> list[str]:
        """Clés actuellement détenues ou attendues."""
        with self._guard:
            return sorted(self._locks)
