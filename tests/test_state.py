"""Tests for machine state lifecycle: reset, ROM loading and keys."""

import jax
import jax.numpy as jnp
import numpy as np
import pytest
from chix8 import (
    create_state, reset, load_rom, load_rom_file, read_rom, set_key, release_all_keys,
    clear_draw_flag, execute, FONT_START, MAX_ROM_SIZE, PROGRAM_START,
    RomTooLarge, RomUnreadable, InvalidKeyIndex, Chip8Error,
)
from chix8.constants import FONT_DATA


class TestCreateState:

    def test_initial_registers(self, fresh_state):
        assert fresh_state.pc == PROGRAM_START
        assert fresh_state.I == 0
        assert fresh_state.stack.pointer == 0
        assert fresh_state.delay_timer == 0
        assert fresh_state.sound_timer == 0
        assert not fresh_state.V.any()
        assert not fresh_state.keypad.any()
        assert not fresh_state.display.any()
        assert not fresh_state.draw

    def test_font_loaded(self, fresh_state):
        font = fresh_state.memory[FONT_START:FONT_START + 80]
        assert [int(b) for b in font] == FONT_DATA
        assert not fresh_state.memory[80:].any()

    def test_dtypes(self, fresh_state):
        assert fresh_state.memory.dtype == jnp.uint8
        assert fresh_state.memory.shape == (4096,)
        assert fresh_state.V.dtype == jnp.uint8
        assert fresh_state.I.dtype == jnp.uint16
        assert fresh_state.pc.dtype == jnp.uint16
        assert fresh_state.display.shape == (256,)
        assert fresh_state.stack.data.shape == (16,)


class TestReset:

    def test_reset_clears_everything(self, fresh_state):
        state = execute(fresh_state, 0x6A42)
        state = execute(state, 0xA300)
        state = execute(state, 0x2400)
        state = execute(state, 0x00E0)
        state = set_key(state, 3, True)
        state = state.replace(memory=state.memory.at[0x300].set(0x99))

        state = reset(state)

        assert state.pc == PROGRAM_START
        assert state.I == 0
        assert state.stack.pointer == 0
        assert not state.stack.data.any()
        assert not state.V.any()
        assert not state.keypad.any()
        assert not state.draw
        assert state.memory[0x300] == 0
        assert [int(b) for b in state.memory[:80]] == FONT_DATA

    def test_reset_keeps_rng(self):
        state = create_state(jax.random.PRNGKey(3))
        assert (reset(state).rng == state.rng).all()


class TestLoadRom:

    def test_load_rom_places_bytes(self, fresh_state):
        state = load_rom(fresh_state, bytes([0x12, 0x34, 0xAB]))
        assert [int(b) for b in state.memory[0x200:0x204]] == [0x12, 0x34, 0xAB, 0x00]
        assert state.pc == PROGRAM_START

    def test_load_rom_resets_first(self, fresh_state):
        state = execute(fresh_state, 0x6542)
        state = state.replace(memory=state.memory.at[0x500].set(0x77))
        state = load_rom(state, b"\x00\xE0")
        assert state.V[5] == 0
        assert state.memory[0x500] == 0

    def test_load_empty_rom(self, fresh_state):
        state = load_rom(fresh_state, b"")
        assert not state.memory[0x200:].any()

    def test_load_maximum_rom(self, fresh_state):
        state = load_rom(fresh_state, b"\xAA" * MAX_ROM_SIZE)
        assert state.memory[0xFFF] == 0xAA
        assert state.memory[0x1FF] == 0

    def test_rom_too_large(self, fresh_state):
        with pytest.raises(RomTooLarge) as excinfo:
            load_rom(fresh_state, b"\x00" * (MAX_ROM_SIZE + 1))
        assert excinfo.value.size == 3585
        assert excinfo.value.limit == 3584
        assert isinstance(excinfo.value, ValueError)

    def test_read_rom(self, tmp_path):
        path = tmp_path / "test.ch8"
        path.write_bytes(b"\x60\x0C")
        assert read_rom(str(path)) == b"\x60\x0C"

    def test_read_missing_rom(self, tmp_path):
        with pytest.raises(RomUnreadable) as excinfo:
            read_rom(str(tmp_path / "missing.ch8"))
        assert isinstance(excinfo.value, Chip8Error)
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)

    def test_load_rom_file(self, fresh_state, tmp_path):
        path = tmp_path / "test.ch8"
        path.write_bytes(b"\x60\x0C")
        state = load_rom_file(fresh_state, str(path))
        assert state.memory[0x200] == 0x60
        assert state.memory[0x201] == 0x0C


class TestKeys:

    def test_set_and_release_key(self, fresh_state):
        state = set_key(fresh_state, 0xF, True)
        assert state.keypad[0xF]
        state = set_key(state, 0xF, False)
        assert not state.keypad.any()

    def test_release_all(self, fresh_state):
        state = set_key(set_key(fresh_state, 1, True), 2, True)
        assert not release_all_keys(state).keypad.any()

    @pytest.mark.parametrize("index", [np.int64(3), np.uint8(3), jnp.int32(3)])
    def test_integer_like_key_index(self, fresh_state, index):
        state = set_key(fresh_state, index, True)
        assert state.keypad[3]
        assert int(state.keypad.sum()) == 1

    @pytest.mark.parametrize("index", [-1, 16, 255, 1.5, "3", None, True, np.int64(16)])
    def test_invalid_key_index(self, fresh_state, index):
        with pytest.raises(InvalidKeyIndex):
            set_key(fresh_state, index, True)


def test_clear_draw_flag(fresh_state):
    state = execute(fresh_state, 0x00E0)
    assert state.draw
    assert not clear_draw_flag(state).draw
