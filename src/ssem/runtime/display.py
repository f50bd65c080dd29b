''' Text rendition of the CRT: registers, then every store line '''

import ssem.common.hwconf as hw
from ssem.common.codec import decode
from ssem.runtime.memory import Memory
from ssem.runtime.cpu import CPU


def format_word(memory: Memory, addr: int) -> str:
    word = memory.read(addr)
    raw = memory.raw(addr)
    return f'{addr:04d}:{raw:0{hw.WORD_BITS}b} | [{decode(word)} ; {word}]'


def format_state(proc: CPU) -> str:
    lines = [f'ci: {proc.ci}, acc: {proc.acc}']
    lines.extend(format_word(proc.memory, addr) for addr in range(hw.WORDS))
    return '\n'.join(lines)
