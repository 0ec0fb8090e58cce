import asyncio
import itertools
from typing import Dict, Any

# This file holds the in-memory product store and its locks.

PRODUCTOS: Dict[int, Dict[str, Any]] = {}
_IDS = itertools.count(1)
_LOCKS: Dict[str, asyncio.Lock] = {}

def _get_lock(key: str) -> asyncio.Lock:
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]

def next_id() -> int:
    return next(_IDS)

def reset_store():
    global _IDS
    PRODUCTOS.clear()
    _LOCKS.clear()
    _IDS = itertools.count(1)
