# Emulated store: one CRT of 32 lines, 32 bits each

from typing import Iterable, Iterator

import ssem.common.hwconf as hw
from ssem.common.codec import to_signed32, raw_word, valid_address


class Memory:
    words: list[int]

    def __init__(self, words: Iterable[int] | None = None):
        self.words = [0] * hw.WORDS

        if words is not None:
            values = list(words)

            if len(values) != hw.WORDS:
                raise ValueError(f'Store holds exactly {hw.WORDS} words, got {len(values)}')

            for addr, value in enumerate(values):
                self.write(addr, value)

    def __len__(self) -> int:
        return hw.WORDS

    def __iter__(self) -> Iterator[int]:
        return iter(self.words)

    def __getitem__(self, addr: int) -> int:
        return self.read(addr)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Memory):
            return NotImplemented

        return self.words == other.words

    def __repr__(self) -> str:
        return f'Memory({self.words})'

    def check(self, addr: int):
        if not valid_address(addr):
            raise IndexError(f'Line {addr} is outside the store')

    def read(self, addr: int) -> int:
        self.check(addr)
        return self.words[addr]

    def write(self, addr: int, value: int):
        self.check(addr)
        self.words[addr] = to_signed32(value)

    def raw(self, addr: int) -> int:
        return raw_word(self.read(addr))

    def copy(self) -> 'Memory':
        return Memory(self.words)
