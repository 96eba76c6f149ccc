"""Token subpackage: scanner and recursive-descent decoders.

Re-exports:
- Scanner: single-character lookahead cursor over the source text
- ElementDecoder: decodes one element of each kind from a Scanner
"""

from json_element.token.decoders import ElementDecoder
from json_element.token.scanner import Scanner

__all__ = ["ElementDecoder", "Scanner"]
