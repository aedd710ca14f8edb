from __future__ import annotations

import re

# ASCII digits only; `\d` would also accept other Unicode decimals.
POSTAL_CODE_PATTERN = re.compile(r"[0-9]{5}-?[0-9]{3}")


def is_valid_postal_code(code: str | None) -> bool:
    if not isinstance(code, str):
        return False
    return POSTAL_CODE_PATTERN.fullmatch(code) is not None


def normalize_postal_code(code: str) -> str:
    """Return the 8-digit form the directory expects (`01310-100` -> `01310100`)."""
    return code.replace("-", "")
