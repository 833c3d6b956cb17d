# Test fixtures
from .sample_texts import (
    ASCII_SAMPLES,
    END_TO_END_SCENARIOS,
    MALFORMED_SAMPLES,
    ROMANIZATION_SAMPLES,
    SMALL_MAPPING,
)

__all__ = [
    "ASCII_SAMPLES",
    "END_TO_END_SCENARIOS",
    "MALFORMED_SAMPLES",
    "ROMANIZATION_SAMPLES",
    "SMALL_MAPPING",
]
