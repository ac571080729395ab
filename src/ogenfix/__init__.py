"""
This file provides:

- Version numbering
- Protocols for the core components of ogenfix.
  By the magic of protocols & duck typing, you can pretty much ignore them,
  unless you want the static type checking.
"""

__version__ = "0.1.0"

from typing import Protocol


class Patcher(Protocol):
    """A pure source-to-source pass: takes a buffer, returns the new buffer and the number of sites changed."""

    def __call__(self, content: bytes) -> tuple[bytes, int]: ...


__all__ = [
    "Patcher",
    "__version__",
]
