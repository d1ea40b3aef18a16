"""
Infrastructure adapter: tiktoken -> ITokenCounter.
The encoding is loaded once at construction so a missing BPE file fails at
startup instead of on a request.
"""

import tiktoken

from src.domain.ports.token_counter_port import ITokenCounter


class TiktokenCounter(ITokenCounter):
    def __init__(self, encoding_name: str = "cl100k_base") -> None:
        self._encoding = tiktoken.get_encoding(encoding_name)

    def count(self, text: str) -> int:
        return len(self._encoding.encode(text, disallowed_special=()))
