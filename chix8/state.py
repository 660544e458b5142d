"""CHIP-8 emulator state structures."""

import operator

import jax
import jax.numpy as jnp
from flax.struct import PyTreeNode

from chix8.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, MEMORY_SIZE, MAX_ROM_SIZE,
    DISPLAY_BYTES, STACK_SIZE, NUM_REGISTERS, NUM_KEYS,
)
from chix8.errors import RomTooLarge, RomUnreadable, InvalidKeyIndex


class StackState(PyTreeNode):
    """Stack state for subroutine calls."""
    data: jnp.ndarray
    pointer: jnp.ndarray


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    The display is packed: 256 bytes, row-major over the 64x32 grid, most
    significant bit first. ``draw`` is raised by every instruction that writes
    the display and lowered by whoever presents the frame.
    """
    rng: jax.Array
    memory: jnp.ndarray
    pc: jnp.ndarray
    display: jnp.ndarray
    draw: jnp.ndarray
    stack: StackState
    delay_timer: jnp.ndarray
    sound_timer: jnp.ndarray
    keypad: jnp.ndarray
    V: jnp.ndarray
    I: jnp.ndarray


def _font_memory() -> jnp.ndarray:
    memory = jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8)
    return memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(jnp.array(FONT_DATA, dtype=jnp.uint8))


def create_state(rng: jax.Array = None) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    return EmulatorState(
        rng=rng,
        memory=_font_memory(),
        pc=jnp.asarray(PROGRAM_START, dtype=jnp.uint16),
        display=jnp.zeros(DISPLAY_BYTES, dtype=jnp.uint8),
        draw=jnp.zeros((), dtype=jnp.bool_),
        stack=StackState(
            data=jnp.zeros(STACK_SIZE, dtype=jnp.uint16),
            pointer=jnp.zeros((), dtype=jnp.uint8),
        ),
        delay_timer=jnp.zeros((), dtype=jnp.uint8),
        sound_timer=jnp.zeros((), dtype=jnp.uint8),
        keypad=jnp.zeros(NUM_KEYS, dtype=jnp.bool_),
        V=jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8),
        I=jnp.zeros((), dtype=jnp.uint16),
    )


def reset(state: EmulatorState) -> EmulatorState:
    """Zero the machine and reload the font. The PRNG key is kept."""
    return create_state(state.rng)


def load_rom(state: EmulatorState, rom_data: bytes) -> EmulatorState:
    """Reset the machine and copy ROM data into memory at 0x200.

    Raises:
        RomTooLarge: if the ROM does not fit in the 3584 bytes above 0x200.
    """
    if len(rom_data) > MAX_ROM_SIZE:
        raise RomTooLarge(len(rom_data), MAX_ROM_SIZE)
    state = reset(state)
    if not rom_data:
        return state
    rom_array = jnp.array(list(rom_data), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom_data)].set(rom_array)
    return state.replace(memory=new_memory)


def read_rom(filename: str) -> bytes:
    """Read a ROM file from disk."""
    try:
        with open(filename, 'rb') as f:
            return f.read()
    except OSError as e:
        raise RomUnreadable(str(filename), e.strerror or str(e)) from e


def load_rom_file(state: EmulatorState, filename: str) -> EmulatorState:
    """Read a ROM file and load it into a freshly reset machine."""
    return load_rom(state, read_rom(filename))


def set_key(state: EmulatorState, index: int, pressed: bool) -> EmulatorState:
    """Record the press state of logical key ``index`` (0x0-0xF)."""
    if isinstance(index, bool):
        raise InvalidKeyIndex(index)
    try:
        key = operator.index(index)
    except TypeError:
        raise InvalidKeyIndex(index) from None
    if not 0 <= key < NUM_KEYS:
        raise InvalidKeyIndex(index)
    return state.replace(keypad=state.keypad.at[key].set(bool(pressed)))


def release_all_keys(state: EmulatorState) -> EmulatorState:
    """Mark every key as released."""
    return state.replace(keypad=jnp.zeros(NUM_KEYS, dtype=jnp.bool_))


def clear_draw_flag(state: EmulatorState) -> EmulatorState:
    """Acknowledge that the current frame has been presented."""
    return state.replace(draw=jnp.zeros((), dtype=jnp.bool_))
