import pytest

import intcode.runtime.cpu as cpu
from intcode.common.ops import Op
from intcode.runtime.memory import AddressError

from unit_utils import boot_string


def run_with(source: str, *inputs: int):
    proc, terminal = boot_string(source, inputs)
    assert proc.run() == cpu.Status.HALTED
    return terminal.drain()


def test_multiply_mixed_modes():
    proc, _ = boot_string('1002,4,3,4,33')

    assert proc.run() == cpu.Status.HALTED
    assert proc.memory[4] == 99


def test_add_negative():
    proc, _ = boot_string('1101,100,-1,4,0')

    assert proc.run() == cpu.Status.HALTED
    assert proc.memory[4] == 99


def test_echo():
    assert run_with('3,0,4,0,99', 7) == [7]


@pytest.mark.parametrize('source', ['3,9,8,9,10,9,4,9,99,-1,8', '3,3,1108,-1,8,3,4,3,99'])
@pytest.mark.parametrize('value, expected', [(8, 1), (7, 0), (9, 0), (-8, 0)])
def test_equals(source, value, expected):
    assert run_with(source, value) == [expected]


@pytest.mark.parametrize('source', ['3,9,7,9,10,9,4,9,99,-1,8', '3,3,1107,-1,8,3,4,3,99'])
@pytest.mark.parametrize('value, expected', [(-100, 1), (7, 1), (8, 0), (9, 0)])
def test_less_than(source, value, expected):
    assert run_with(source, value) == [expected]


@pytest.mark.parametrize('source', [
    '3,12,6,12,15,1,13,14,13,4,13,99,-1,0,1,9',
    '3,3,1105,-1,9,1101,0,0,12,4,12,99,1'
])
@pytest.mark.parametrize('value, expected', [(0, 0), (1, 1), (-5, 1)])
def test_jumps(source, value, expected):
    assert run_with(source, value) == [expected]


def test_write_ignores_immediate_mode():
    proc, _ = boot_string('11101,2,3,5,99,0')

    assert proc.run() == cpu.Status.HALTED
    assert proc.memory[5] == 5


def test_large_values():
    proc, _ = boot_string('1102,34915192,34915192,7,4,7,99,0')
    assert proc.run() == cpu.Status.HALTED
    assert proc.terminal.drain() == [34915192 * 34915192]


@pytest.mark.parametrize('source, word', [('42', 42), ('-1', -1), ('1,0,0,0,0', 0)])
def test_unknown_opcode(source, word):
    proc, _ = boot_string(source)

    assert proc.run() == cpu.Status.FAULTED
    assert proc.fault is not None
    assert proc.fault.op == Op.UNKNOWN
    assert proc.fault.word == word


@pytest.mark.parametrize('source, address, pc', [
    ('1,100,0,0,99', 100, 0),
    ('1,-1,0,0,99', -1, 0),
    ('1101,1,1,9,99', 9, 0),
    ('1,0,0,0', 4, 4),
    ('1105,1,-3,99', -3, -3),
])
def test_address_out_of_range(source, address, pc):
    proc, _ = boot_string(source)

    with pytest.raises(AddressError) as e:
        proc.run()

    assert e.value.address == address
    assert e.value.pc == pc
    assert proc.status == cpu.Status.FAULTED


def test_needs_input_and_resume():
    proc, terminal = boot_string('3,0,4,0,99')

    assert proc.run() == cpu.Status.NEEDS_INPUT
    assert proc.ip == 0
    assert proc.ticks == 0

    # Still starving without a value
    assert proc.run() == cpu.Status.NEEDS_INPUT

    terminal.feed(5)
    assert proc.run() == cpu.Status.HALTED
    assert terminal.drain() == [5]


def test_halt_is_final():
    proc, terminal = boot_string('3,0,4,0,99', [1])
    assert proc.run() == cpu.Status.HALTED
    ticks = proc.ticks

    terminal.feed(2)
    assert proc.run() == cpu.Status.HALTED
    assert proc.ticks == ticks
    assert terminal.drain() == [1]


def test_fault_is_final():
    proc, _ = boot_string('42')
    assert proc.run() == cpu.Status.FAULTED
    assert proc.run() == cpu.Status.FAULTED


def test_resume_is_transparent():
    source = '3,12,6,12,15,1,13,14,13,4,13,99,-1,0,1,9'

    eager, eager_terminal = boot_string(source, [3], trace=True)
    eager.run()

    lazy, lazy_terminal = boot_string(source, trace=True)
    assert lazy.run() == cpu.Status.NEEDS_INPUT
    lazy_terminal.feed(3)
    lazy.run()

    assert lazy.status == eager.status == cpu.Status.HALTED
    assert lazy.trace == eager.trace
    assert lazy.memory.dump() == eager.memory.dump()
    assert lazy_terminal.history == eager_terminal.history == [1]


def test_deterministic():
    source = '3,9,8,9,10,9,4,9,99,-1,8'
    runs = [run_with(source, 8) for _ in range(3)]
    assert runs == [[1], [1], [1]]
