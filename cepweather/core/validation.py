from __future__ import annotations

import re

_CEP_PATTERN = re.compile(r"[0-9]{8}")


def validate_cep(code: object) -> bool:
    """Return True when ``code`` is exactly eight ASCII digits."""
    if not isinstance(code, str):
        return False
    return _CEP_PATTERN.fullmatch(code) is not None


__all__ = ["validate_cep"]
