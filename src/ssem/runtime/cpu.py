import logging as lg
from typing import Callable

import ssem.common.hwconf as hw
from ssem.common.ops import Opcode
from ssem.common.codec import Instruction, decode, to_signed32, valid_address
from ssem.common.errors import RunawayProgramCounter
from ssem.runtime.memory import Memory


Observer = Callable[['CPU', Instruction], None]


class CPU():
    ci: int     # Control instruction (program counter)
    acc: int    # Accumulator
    running: bool
    fault: RunawayProgramCounter | None

    def __init__(self, memory: Memory, observer: Observer | None = None):
        self.memory = memory        # Owned store
        self.observer = observer    # Called after every executed instruction
        self.reset()

    # - Helpers - #

    def debug_dump(self):
        lg.debug(f'CI:{self.ci} ACC:{self.acc} RUN:{int(self.running)}')

    def operand_value(self, inst: Instruction) -> int:
        return self.memory.read(inst.operand)

    # - Operations - #

    def jmp(self, inst: Instruction):
        # Indirect: the operand names the line holding the new CI
        self.ci = self.operand_value(inst)

    def jrp(self, inst: Instruction):
        self.ci = self.ci + self.operand_value(inst)

    def ldn(self, inst: Instruction):
        self.acc = to_signed32(-self.operand_value(inst))

    def sto(self, inst: Instruction):
        self.memory.write(inst.operand, self.acc)

    def sub(self, inst: Instruction):
        self.acc = to_signed32(self.acc - self.operand_value(inst))

    def cmp(self, inst: Instruction):
        if self.acc < 0:
            self.ci += 1

    def stp(self, inst: Instruction):
        self.running = False

    HANDLERS = {
        Opcode.JMP: jmp,
        Opcode.JRP: jrp,
        Opcode.LDN: ldn,
        Opcode.STO: sto,
        Opcode.SUB: sub,
        Opcode.CMP: cmp,
        Opcode.STP: stp,
    }

    # -- Implementation -- #

    def fetch(self) -> Instruction:
        ci = self.ci + 1

        if not valid_address(ci):
            self.running = False
            self.fault = RunawayProgramCounter(ci)
            lg.debug(f'Runaway CI {ci}, machine halted')
            raise self.fault

        self.ci = ci
        return decode(self.memory.read(ci))

    def step(self) -> Instruction | None:
        if not self.running:
            return None

        inst = self.fetch()
        lg.debug(f'{self.ci:04d} {inst}')

        handler = self.HANDLERS[inst.op]
        handler(self, inst)
        self.debug_dump()

        if self.observer is not None:
            self.observer(self, inst)

        return inst

    def run(self) -> int:
        steps = 0

        while self.running:
            self.step()
            steps += 1

        return steps

    def reset(self):
        ''' Back to the power-on registers: CI sits one line before 0, so the
            next fetch reads line 0 just as on a freshly built machine '''
        self.ci = hw.START_CI
        self.acc = 0
        self.running = True
        self.fault = None

    def reboot(self, memory: Memory):
        self.memory = memory
        self.reset()
