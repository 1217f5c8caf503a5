"""Input-layer public API for key decoding and dispatch tables."""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "read_key",
]
