"""Lenient field types for records decoded from hand-editable JSON.

Absent or mistyped values never fail validation: strings fall back to ``""``
and integers to ``0``.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_int(value: Any) -> int:
    # bool is an int subclass but never a valid timestamp
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


LenientStr = Annotated[str, BeforeValidator(_as_str)]
LenientInt = Annotated[int, BeforeValidator(_as_int)]
