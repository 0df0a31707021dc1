"""Fixed special-token table with hashed fallback ids.

There is no vocabulary file: the four BERT sentinels are looked up in a
table and every other word is folded into ``[HASH_MIN_TOKEN_ID,
HASH_VOCAB_SIZE)`` by an order-dependent character hash. Distinct words
can share an id.
"""

from __future__ import annotations

from ..config.encoder import (
    HASH_MIN_TOKEN_ID,
    HASH_MULTIPLIER,
    HASH_VOCAB_SIZE,
    SPECIAL_TOKEN_IDS,
)


def hash_token_id(token: str) -> int:
    """Deterministic fallback id for a token outside the special table."""
    value = 0
    for ch in token:
        value = (value * HASH_MULTIPLIER + ord(ch)) % HASH_VOCAB_SIZE
    return max(HASH_MIN_TOKEN_ID, value)


class HashedVocab:
    """Token-to-id lookup over the special table plus hashed fallback."""

    def __init__(self, special_tokens: dict[str, int] | None = None) -> None:
        self._special = dict(SPECIAL_TOKEN_IDS if special_tokens is None else special_tokens)

    def __contains__(self, token: str) -> bool:
        return token in self._special

    def __len__(self) -> int:
        return len(self._special)

    def token_id(self, token: str) -> int:
        special = self._special.get(token)
        if special is not None:
            return special
        return hash_token_id(token)


__all__ = ["HashedVocab", "hash_token_id"]
