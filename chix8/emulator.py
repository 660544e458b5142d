"""Main CHIP-8 emulator execution engine."""

from functools import partial

import jax
import jax.lax
import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import decode, make_instruction
from chix8.constants import ADDRESS_MASK
from chix8.instructions.system import execute_system_instruction
from chix8.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_key_instruction
)
from chix8.instructions.alu import execute_alu_operation
from chix8.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chix8.instructions.display import execute_display
from chix8.instructions.misc import execute_misc_instruction


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    The handler for the instruction moves PC itself: by 2, by 4 for a taken
    skip, to the target of a jump, or not at all for FX0A without a key.
    """
    decoded_instruction = decode(jnp.asarray(instruction, dtype=jnp.uint16))

    return jax.lax.switch(
        decoded_instruction.op,
        [
            execute_system_instruction,
            execute_jump,
            execute_call,
            execute_skip_if_equal_immediate,
            execute_skip_if_not_equal_immediate,
            execute_skip_if_equal_register,
            execute_set,
            execute_add,
            execute_alu_operation,
            execute_skip_if_not_equal_register,
            execute_set_index,
            execute_jump_with_offset,
            execute_random,
            execute_display,
            execute_key_instruction,
            execute_misc_instruction,
        ],
        state, decoded_instruction
    )


def fetch(state: EmulatorState) -> jnp.ndarray:
    """Read the big-endian instruction word at PC. The state is not modified."""
    high = jnp.astype(state.memory[state.pc & ADDRESS_MASK], jnp.uint16)
    low = jnp.astype(state.memory[(state.pc + 1) & ADDRESS_MASK], jnp.uint16)
    return make_instruction(high, low)


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement the delay and sound timers toward zero."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


def cycle(state: EmulatorState) -> EmulatorState:
    """Fetch, decode and execute one instruction, then tick the timers."""
    return tick_timers(execute(state, fetch(state)))


@jax.jit
def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch-decode-execute-timer cycle.

    Timers decay once per cycle rather than at a fixed 60 Hz, so callers must
    pace ``step`` (around 600 calls per second) for timers to run at the
    intended rate.
    """
    return cycle(state)


def _scan_cycle(state, _):
    return cycle(state), None


@partial(jax.jit, static_argnums=1)
def run_cycles(state: EmulatorState, n: int) -> EmulatorState:
    """Run ``n`` cycles back to back without returning to Python."""
    state, _ = jax.lax.scan(_scan_cycle, state, length=n)
    return state
