"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.constants import FONT_START, FONT_CHAR_SIZE, ADDRESS_MASK, FLAG_REGISTER, NUM_REGISTERS
from chix8.instructions.system import no_op


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer), pc=state.pc + 2)


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x], pc=state.pc + 2)


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x], pc=state.pc + 2)


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I, VF = 1 if the sum passes 0xFFF.

    I keeps the full 16-bit sum; memory accesses through it wrap.
    """
    overflow = jnp.astype(state.I, jnp.int32) + state.V[instruction.x] > ADDRESS_MASK
    new_V = state.V.at[FLAG_REGISTER].set(jnp.astype(overflow, jnp.uint8))
    return state.replace(
        V=new_V,
        I=state.I + jnp.astype(new_V[instruction.x], jnp.uint16),
        pc=state.pc + 2,
    )


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Without a pressed key PC stays put, so the next cycle runs this
    instruction again. Otherwise the lowest pressed key goes to VX.
    """
    def key_pressed_action(state):
        pressed_key = jnp.astype(jnp.argmax(state.keypad), jnp.uint8)
        return state.replace(V=state.V.at[instruction.x].set(pressed_key), pc=state.pc + 2)

    def wait_action(state):
        return state

    return jax.lax.cond(jnp.any(state.keypad), key_pressed_action, wait_action, state)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + jnp.astype(state.V[instruction.x], jnp.uint16) * FONT_CHAR_SIZE
    return state.replace(I=jnp.astype(font_address, jnp.uint16), pc=state.pc + 2)


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = state.V[instruction.x]

    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    indices = (state.I + jnp.arange(3, dtype=jnp.uint16)) & ADDRESS_MASK
    new_memory = state.memory.at[indices].set(digits)
    return state.replace(memory=new_memory, pc=state.pc + 2)


def _register_window(state: EmulatorState, instruction: DecodedInstruction):
    register_mask = jnp.arange(NUM_REGISTERS) <= instruction.x
    base_indices = (state.I + jnp.arange(NUM_REGISTERS, dtype=jnp.uint16)) & ADDRESS_MASK
    return register_mask, base_indices


def _next_index(state: EmulatorState, instruction: DecodedInstruction) -> jnp.ndarray:
    return state.I + jnp.astype(instruction.x, jnp.uint16) + 1


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I, then I += X + 1."""
    register_mask, base_indices = _register_window(state, instruction)
    current_memory_values = state.memory[base_indices]
    new_memory_values = jnp.where(register_mask, state.V, current_memory_values)
    new_memory = state.memory.at[base_indices].set(new_memory_values)
    return state.replace(memory=new_memory, I=_next_index(state, instruction), pc=state.pc + 2)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I, then I += X + 1."""
    register_mask, base_indices = _register_window(state, instruction)
    memory_values = state.memory[base_indices]
    new_V = jnp.where(register_mask, memory_values, state.V)
    return state.replace(V=new_V, I=_next_index(state, instruction), pc=state.pc + 2)


# FXKK: KK -> handler index, anything unlisted is skipped over
MISC_OPCODES = (0x07, 0x0A, 0x15, 0x18, 0x1E, 0x29, 0x33, 0x55, 0x65)
MISC_TABLE = jnp.full(256, len(MISC_OPCODES), dtype=jnp.int32).at[jnp.array(MISC_OPCODES)].set(
    jnp.arange(len(MISC_OPCODES), dtype=jnp.int32)
)


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch misc instructions through a jump table on KK."""
    return jax.lax.switch(
        MISC_TABLE[instruction.kk],
        [
            execute_get_delay_timer,
            execute_wait_for_key,
            execute_set_delay_timer,
            execute_set_sound_timer,
            execute_add_to_index,
            execute_font_character,
            execute_bcd_conversion,
            execute_store_registers,
            execute_load_registers,
            no_op,
        ],
        state, instruction
    )
