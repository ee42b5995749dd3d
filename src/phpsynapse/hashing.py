"""Identifier derivation for extracted handlers.

Identifiers are a djb2-xor hash of ``"{project_path}-{index}"`` rendered in
base 36. They depend only on where a block sits, never on its code, so editing
a block keeps its handler name stable. Collisions are not detected.
"""

from __future__ import annotations

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_MASK = 0xFFFFFFFF


def filesystem_safe_hash(seed: str) -> str:
    """Return the lowercase base-36 djb2-xor hash of *seed*.

    Characters are consumed as UTF-16 code units so that identifiers agree
    with the ones a JavaScript runtime derives from the same seed.
    """
    h = 5381
    units = seed.encode("utf-16-le")
    for i in range(0, len(units), 2):
        h = ((h * 33) ^ int.from_bytes(units[i:i + 2], "little")) & _MASK
    return _to_base36(h)


def block_identifier(project_path: str, index: int) -> str:
    """Identifier for the *index*-th embedded block of *project_path*."""
    return filesystem_safe_hash(f"{project_path}-{index}")


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_DIGITS[rem])
    return "".join(reversed(digits))
