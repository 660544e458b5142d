"""CHIP-8 display operations."""

import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.constants import ADDRESS_MASK, FLAG_REGISTER
from chix8.framebuffer import draw_sprite, MAX_SPRITE_HEIGHT


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision.

    VF is cleared before the coordinates are read, so DFYN draws at column 0.
    """
    V = state.V.at[FLAG_REGISTER].set(0)

    addresses = (state.I + jnp.arange(MAX_SPRITE_HEIGHT, dtype=jnp.uint16)) & ADDRESS_MASK
    sprite = state.memory[addresses]

    display, collision = draw_sprite(state.display, V[instruction.x], V[instruction.y], sprite, instruction.n)

    return state.replace(
        display=display,
        draw=jnp.ones((), dtype=jnp.bool_),
        V=V.at[FLAG_REGISTER].set(collision),
        pc=state.pc + 2,
    )
