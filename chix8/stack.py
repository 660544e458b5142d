"""CHIP-8 stack operations.

Depth is not validated. A push on a full stack drops the write (out of bounds
scatter) while the pointer still moves, and a pop on an empty stack wraps the
8-bit pointer and reads the clamped last slot.
"""

import jax.numpy as jnp
from chix8.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    new_data = stack.data.at[stack.pointer].set(jnp.astype(address, jnp.uint16))
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    new_pointer = stack.pointer - 1
    return stack.replace(pointer=new_pointer), stack.data[new_pointer]
