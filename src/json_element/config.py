"""ParserConfig: immutable tuning knobs for the JSON scanner and decoders.

ParserConfig is a frozen (immutable) dataclass validated on construction.
Every parse entry point accepts an optional instance and falls back to the
defaults when none is given.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["ParserConfig"]


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Immutable configuration for parsing JSON text.

    Attributes:
        max_depth: Maximum nesting depth of arrays and objects (>= 1).  Deeper
            input is rejected with a ``depth_exceeded`` grammar error instead
            of exhausting the interpreter stack.  Decoding takes two frames per
            level; the default fits the default recursion limit of 1000.
        excerpt_radius: Number of characters shown on each side of the failure
            offset when a grammar error is rendered (>= 0).
    """

    max_depth: int = 200
    excerpt_radius: int = 25

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)
        if self.excerpt_radius < 0:
            msg = f"excerpt_radius must be >= 0, got {self.excerpt_radius}"
            raise ValueError(msg)
