"""Memento codec for cache contents.

A memento is the ordered list of coin ids a cache holds, encoded as compact
JSON text (``'["5:10#0","5:10#1"]'``). It is the only thing the cache
directory and durable storage remember about a cache, so decoding validates
strictly and raises :class:`~geocoin.errors.MalformedMementoError` rather than
guessing.
"""

import json
from typing import Iterable, Tuple

from geocoin.errors import MalformedMementoError
from geocoin.types import CoinID, Memento


def encode_memento(coin_ids: Iterable[CoinID]) -> Memento:
    """Serialize coin ids, preserving order."""
    return json.dumps(list(coin_ids), separators=(",", ":"))


def decode_memento(memento: Memento) -> Tuple[CoinID, ...]:
    """Parse a memento back into its ordered coin ids.

    Raises:
        MalformedMementoError: If the text is not JSON, not a list, or holds
            anything other than strings.
    """
    if not isinstance(memento, str):
        raise MalformedMementoError("memento must be a string")
    try:
        decoded = json.loads(memento)
    except json.JSONDecodeError as exc:
        raise MalformedMementoError(f"memento is not valid JSON: {exc}") from exc
    if not isinstance(decoded, list):
        raise MalformedMementoError("memento must encode a list of coin ids")
    if not all(isinstance(coin_id, str) for coin_id in decoded):
        raise MalformedMementoError("memento entries must be strings")
    return tuple(decoded)
