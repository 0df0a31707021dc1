"""Text encoding for the politeness classifier."""

from .vocab import HashedVocab, hash_token_id
from .encoder import Encoder, encode, split_words

__all__ = [
    "Encoder",
    "HashedVocab",
    "encode",
    "hash_token_id",
    "split_words",
]
