from types import SimpleNamespace

from pychip8.cpu import CPUState
from pychip8.utils.trace import TraceRecorder


def test_trace_recorder_overwrites_old_entries():
    recorder = TraceRecorder(capacity=2)
    state = CPUState()

    recorder.record_step(state, 0x6001, delay=0, sound=0, mnemonic="LD")
    state.pc = 0x202
    state.v[1] = 0xAB
    recorder.record_step(state, 0x2300, delay=5, sound=0, mnemonic="CALL")
    state.pc = 0x300
    state.stack.push(0x204)
    recorder.record_step(state, 0xF10A, delay=4, sound=2, waiting=True, mnemonic="LD", note="key")

    lines = list(recorder.format_entries())
    assert len(lines) == 2
    assert "pc=0202" in lines[0]
    assert "opcode=2300 CALL" in lines[0]
    assert "V=[00 AB 00" in lines[0]
    assert "pc=0300" in lines[1]
    assert "SP=01" in lines[1]
    assert "DT=04 ST=02" in lines[1]
    assert "flags=WAIT,key" in lines[1]


def test_trace_recorder_snapshots_values():
    recorder = TraceRecorder(4)
    state = CPUState()
    recorder.record_step(state, 0x00E0, delay=0, sound=0)

    state.v[0] = 0x77
    entry = recorder.last_entry()

    assert entry is not None
    assert entry.registers[0] == 0


def test_trace_recorder_handles_missing_opcode():
    recorder = TraceRecorder(1)
    state = SimpleNamespace(pc=0x0FFF, v=bytes(16), i=0, stack=[])
    recorder.record_step(state, None, delay=0, sound=0, note="fault")
    lines = list(recorder.format_entries())
    assert len(lines) == 1
    assert "opcode=----" in lines[0]
    assert "flags=fault" in lines[0]


def test_trace_recorder_limit_and_empty():
    recorder = TraceRecorder(8)
    assert recorder.last_entry() is None
    state = CPUState()
    for pc in (0x200, 0x202, 0x204):
        state.pc = pc
        recorder.record_step(state, 0x0000, delay=0, sound=0)

    lines = list(recorder.format_entries(limit=1))
    assert len(lines) == 1
    assert "pc=0204" in lines[0]
