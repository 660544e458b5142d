"""CHIP-8 system instructions (0x0xxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.framebuffer import clear_display
from chix8.stack import pop


def advance(state: EmulatorState, amount: int = 2) -> EmulatorState:
    """Move PC past the current instruction."""
    return state.replace(pc=state.pc + amount)


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Unknown instruction: skip it."""
    return advance(state)


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    state = state.replace(display=clear_display(), draw=jnp.ones((), dtype=jnp.bool_))
    return advance(state)


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return advance(state.replace(stack=stack, pc=address))


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions."""
    return jax.lax.cond(
        0x00E0 == instruction.raw,
        execute_clear_screen,
        lambda state, instruction: jax.lax.cond(
            0x00EE == instruction.raw,
            execute_return,
            no_op,
            state, instruction
        ),
        state, instruction
    )
