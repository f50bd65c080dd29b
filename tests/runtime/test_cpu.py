import pytest

import ssem.common.hwconf as hw
from ssem.common.ops import Opcode
from ssem.common.codec import Instruction, encode
from ssem.common.errors import RunawayProgramCounter
from ssem.runtime.cpu import CPU
from ssem.sasm.loader import load_program

import unit_utils
from fixtures import with_countdown, with_trace  # noqa: F401


def word(op: Opcode, operand: int = 0) -> int:
    return encode(Instruction(op, operand))


def test_power_on():
    proc = CPU(unit_utils.memory_with({}))

    assert proc.ci == hw.START_CI
    assert proc.acc == 0
    assert proc.running
    assert proc.fault is None


def test_indirect_jump_halts_in_two_steps():
    proc = CPU(unit_utils.load_testdata('jump'))

    assert proc.step() == Instruction(Opcode.JMP, 2)
    assert proc.ci == 0
    assert proc.step() == Instruction(Opcode.STP)
    assert proc.ci == 1
    assert not proc.running


def test_run_counts_steps():
    proc = CPU(unit_utils.load_testdata('jump'))
    assert proc.run() == 2


def test_relative_jump_from_next_line():
    proc = CPU(load_program([
        '0000 JRP 3',
        '0001 STP',
        '0002 STP',
        '0003 NUM 1',
    ]))

    proc.step()
    assert proc.ci == 1

    proc.step()
    assert proc.ci == 2
    assert not proc.running


def test_relative_jump_backwards():
    memory = unit_utils.memory_with({
        0: word(Opcode.JMP, 10),
        6: word(Opcode.JRP, 11),
        7: word(Opcode.STP),
        10: 5,
        11: -6,
    })
    proc = CPU(memory)

    proc.step()
    assert proc.ci == 5

    proc.step()
    assert proc.ci == 0


def test_arithmetic():
    proc = unit_utils.execute_testdata('arithmetic')

    assert proc.memory[22] == -12
    assert proc.memory[23] == 12
    assert proc.acc == 12
    assert proc.ci == 5


def test_subtract_wraps():
    proc = CPU(unit_utils.memory_with({
        0: word(Opcode.LDN, 20),
        1: word(Opcode.SUB, 21),
        2: word(Opcode.STO, 22),
        3: word(Opcode.STP),
        20: 2 ** 31 - 1,
        21: 2,
    }))
    proc.run()

    # -(2**31 - 1) - 2 == -2**31 - 1, one past the bottom
    assert proc.acc == 2 ** 31 - 1
    assert proc.memory[22] == 2 ** 31 - 1


def test_load_negative_of_minimum():
    proc = CPU(unit_utils.memory_with({
        0: word(Opcode.LDN, 9),
        9: -2 ** 31,
    }))
    proc.step()
    assert proc.acc == -2 ** 31


def test_alternate_subtract_encoding():
    proc = CPU(unit_utils.memory_with({
        0: (0x5 << 13) | 9,
        1: word(Opcode.STP),
        9: 4,
    }))
    proc.run()
    assert proc.acc == -4


def test_compare_skips_when_negative():
    proc = CPU(load_program([
        '0000 LDN 10',
        '0001 CMP',
        '0002 STP',
        '0003 STP',
        '0010 NUM 3',
    ]))
    proc.run()
    assert proc.ci == 3


def test_compare_falls_through_on_zero():
    proc = CPU(load_program([
        '0000 LDN 10',
        '0001 CMP',
        '0002 STP',
        '0003 STP',
    ]))
    proc.run()
    assert proc.ci == 2


def test_countdown(with_countdown):  # noqa: F811
    assert with_countdown.run() == 28
    assert with_countdown.ci == 7
    assert with_countdown.acc == -1
    assert with_countdown.memory[20] == -1


def test_halted_step_is_noop():
    proc = unit_utils.execute_testdata('jump')
    before = (proc.ci, proc.acc, list(proc.memory))

    assert proc.step() is None
    assert proc.run() == 0
    assert (proc.ci, proc.acc, list(proc.memory)) == before


def test_runaway_past_end():
    proc = CPU(unit_utils.load_testdata('runaway'))
    proc.step()
    assert proc.ci == 31

    with pytest.raises(RunawayProgramCounter) as info:
        proc.step()

    assert info.value.ci == 32
    assert proc.fault is info.value
    assert proc.ci == 31
    assert not proc.running


def test_runaway_before_start():
    proc = CPU(unit_utils.memory_with({
        0: word(Opcode.JRP, 5),
        5: -10,
    }))
    proc.step()

    with pytest.raises(RunawayProgramCounter) as info:
        proc.run()

    assert info.value.ci == -9
    assert not proc.running


def test_runaway_by_compare_skip():
    memory = unit_utils.memory_with({
        0: word(Opcode.LDN, 29),
        1: word(Opcode.JMP, 28),
        28: 30,
        29: 1,
        31: word(Opcode.CMP),
    })
    proc = CPU(memory)

    with pytest.raises(RunawayProgramCounter) as info:
        proc.run()

    assert info.value.ci == 33


def test_reset_keeps_memory(with_countdown):  # noqa: F811
    with_countdown.run()
    memory = with_countdown.memory.copy()

    with_countdown.reset()

    assert with_countdown.ci == hw.START_CI
    assert with_countdown.acc == 0
    assert with_countdown.running
    assert with_countdown.memory == memory


def test_reset_clears_fault():
    proc = CPU(unit_utils.load_testdata('runaway'))

    with pytest.raises(RunawayProgramCounter):
        proc.run()

    proc.reset()
    assert proc.fault is None
    assert proc.running


def test_reboot_replaces_memory(with_countdown):  # noqa: F811
    with_countdown.run()
    fresh = unit_utils.load_testdata('jump')

    with_countdown.reboot(fresh)

    assert with_countdown.memory is fresh
    assert with_countdown.ci == hw.START_CI
    assert with_countdown.acc == 0
    assert with_countdown.run() == 2


def test_observer(with_trace):  # noqa: F811
    trace, observer = with_trace
    proc = CPU(unit_utils.load_testdata('arithmetic'), observer=observer)
    proc.run()

    assert trace == [
        (0, 'LDN 20'),
        (1, 'SUB 21'),
        (2, 'STO 22'),
        (3, 'LDN 22'),
        (4, 'STO 23'),
        (5, 'STP'),
    ]


def test_reset_refetches_line_zero():
    proc = unit_utils.execute_testdata('arithmetic')
    proc.reset()

    assert proc.step() == Instruction(Opcode.LDN, 20)
    assert proc.ci == 0
    assert proc.acc == -5
