"""CHIP-8 ALU operations (8xxx).

Every flagged operation writes VF before writing VX, reading VX and VY again
afterwards. When X or Y is F the flag therefore feeds into the result.
"""

import jax
import jax.lax
import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.constants import FLAG_REGISTER


def _set_flag(V: jnp.ndarray, flag) -> jnp.ndarray:
    return V.at[FLAG_REGISTER].set(jnp.astype(flag, jnp.uint8))


def alu_set(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY0 - Set: VX = VY."""
    return V.at[x].set(V[y])


def alu_or(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY1 - Binary OR: VX |= VY."""
    return V.at[x].set(V[x] | V[y])


def alu_and(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY2 - Binary AND: VX &= VY."""
    return V.at[x].set(V[x] & V[y])


def alu_xor(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY3 - Logical XOR: VX ^= VY."""
    return V.at[x].set(V[x] ^ V[y])


def alu_add(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY4 - Add: VF = carry, VX += VY."""
    V = _set_flag(V, jnp.astype(V[x], jnp.uint16) + V[y] > 0xFF)
    return V.at[x].set(V[x] + V[y])


def alu_sub_xy(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY5 - Subtract: VF = VX > VY, VX -= VY."""
    V = _set_flag(V, V[x] > V[y])
    return V.at[x].set(V[x] - V[y])


def alu_shift_right(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY6 - Shift right: VF = LSB of VX, VX >>= 1. VY is ignored."""
    V = _set_flag(V, V[x] & 1)
    return V.at[x].set(V[x] >> 1)


def alu_sub_yx(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY7 - Subtract: VF = VY > VX, VX = VY - VX."""
    V = _set_flag(V, V[y] > V[x])
    return V.at[x].set(V[y] - V[x])


def alu_shift_left(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XYE - Shift left: VF = MSB of VX, VX <<= 1. VY is ignored."""
    V = _set_flag(V, V[x] >> 7)
    return V.at[x].set(V[x] << 1)


def alu_undefined(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """Undefined ALU operation."""
    return V


# 8XYN: N -> handler index, undefined N values fall through to alu_undefined
ALU_TABLE = jnp.array([0, 1, 2, 3, 4, 5, 6, 7, 9, 9, 9, 9, 9, 9, 8, 9], dtype=jnp.int32)


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    new_V = jax.lax.switch(
        ALU_TABLE[instruction.n],
        [alu_set, alu_or, alu_and, alu_xor, alu_add,
         alu_sub_xy, alu_shift_right, alu_sub_yx, alu_shift_left, alu_undefined],
        state.V, instruction.x, instruction.y
    )
    return state.replace(V=new_V, pc=state.pc + 2)
