"""
Cache clave/valor en memoria con tiempo de vida opcional por entrada.

Se usa de forma oportunista por el servicio de equipos (patrón cache-aside):
solo get/set. Las entradas expiran solas según su TTL; no hay invalidación
cuando cambian los datos de la base.
"""
import math
import threading
import time

from cachetools import TLRUCache

from config import CACHE_MAXSIZE

_lock = threading.Lock()


def _time_to_use(key, entry, now):
    # entry = (valor, ttl_ms); sin TTL la entrada no expira
    ttl_ms = entry[1]
    if ttl_ms is None:
        return math.inf
    return now + ttl_ms / 1000


def _build(maxsize, timer):
    return TLRUCache(maxsize=maxsize, ttu=_time_to_use, timer=timer)


_store = _build(CACHE_MAXSIZE, time.monotonic)


def get(key: str):
    """Devuelve el valor guardado en `key`, o None si no existe o ya expiró."""
    with _lock:
        entry = _store.get(key)
    if entry is None:
        return None
    return entry[0]


def set(key: str, value, ttl_ms: int = None) -> None:
    """Guarda `value` en `key`. `ttl_ms` en milisegundos; None = sin expiración."""
    with _lock:
        _store[key] = (value, ttl_ms)


def clear(timer=None, maxsize: int = CACHE_MAXSIZE) -> None:
    """
    Vacía el cache.

    Permite además reemplazar el reloj (segundos, monotónico), útil en pruebas
    para simular el paso del tiempo.
    """
    global _store
    with _lock:
        _store = _build(maxsize, timer or time.monotonic)
