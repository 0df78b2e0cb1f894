#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Bit packing, parameter checks and rng coercion shared by all rbnforge modules.
"""


##Imports
from __future__ import annotations
import math
import random as _py_random

import numpy as np
from numpy.random import Generator as _NPGen, RandomState as _NPRandomState, SeedSequence, default_rng

from typing import Union

try:
    from rbnforge.exceptions import InvalidParametersError
except ModuleNotFoundError:
    from exceptions import InvalidParametersError


def _coerce_rng(rng : Union[int, _NPGen, _NPRandomState, _py_random.Random, None] = None) -> _NPGen:
    """
    Return a NumPy Generator given a variety of rng-like inputs.

    **Accepts:**

      - None                -> default_rng() (fresh OS entropy)
      - int (seed)          -> default_rng(seed)
      - np.random.Generator -> returned as-is
      - np.random.RandomState -> converted via SeedSequence
      - random.Random       -> converted via SeedSequence

    **Raises:**

        - TypeError: for unsupported inputs.
    """
    if rng is None:
        return default_rng()
    if isinstance(rng, _NPGen):
        return rng
    if isinstance(rng, (bool, np.bool_)):
        raise TypeError(f"Unsupported rng type: {type(rng)!r}")
    if isinstance(rng, (int, np.integer)):
        return default_rng(int(rng))
    if isinstance(rng, _NPRandomState):
        # derive robust entropy from the legacy RNG
        entropy = rng.randint(0, 2**32, size=4, dtype=np.uint32)
        return default_rng(SeedSequence(entropy))
    if isinstance(rng, _py_random.Random):
        entropy = [rng.getrandbits(32) for _ in range(4)]
        return default_rng(SeedSequence(entropy))
    raise TypeError(f"Unsupported rng type: {type(rng)!r}")


def bin2dec(binary_vector : list) -> int:
    """
    Convert a binary vector to an integer, first entry most significant.

    **Parameters:**

        - binary_vector (list[int]): List containing binary digits (0 or 1).

    **Returns:**

        - int: Integer value converted from the binary vector. The empty
          vector maps to 0.
    """
    decimal = 0
    for bit in binary_vector:
        decimal = (decimal << 1) | int(bit)
    return int(decimal)


def dec2bin(integer_value : int, num_bits : int) -> list:
    """
    Convert an integer to a binary vector.

    **Parameters:**

        - integer_value (int): Integer value to be converted.
        - num_bits (int): Number of bits in the binary representation.

    **Returns:**

        - list[int]: List containing binary digits (0 or 1).
    """
    if num_bits == 0:
        return []
    binary_string = bin(integer_value)[2:].zfill(num_bits)
    return [int(bit) for bit in binary_string]

left_side_of_truth_tables = {}

def get_left_side_of_truth_table(N : int) -> np.ndarray:
    """
    All N-bit vectors in binary counting order, most significant bit first.

    Row i of the returned (2^N, N) array is dec2bin(i, N). Results are cached
    and returned read-only.
    """
    if N in left_side_of_truth_tables:
        left_side_of_truth_table = left_side_of_truth_tables[N]
    else:
        vals = np.arange(2**N, dtype=np.uint64)[:, None]              # shape (2^n, 1)
        shifts = np.arange(N-1, -1, -1, dtype=np.int64).astype(np.uint64)
        masks = (np.uint64(1) << shifts)[None]                         # shape (1, n)
        left_side_of_truth_table = ((vals & masks) != 0).astype(np.uint8).reshape(2**N, N)
        left_side_of_truth_table.setflags(write=False)
        left_side_of_truth_tables[N] = left_side_of_truth_table
    return left_side_of_truth_table


def check_probability(p : float, name : str = 'p') -> float:
    """
    Validate a probability.

    **Parameters:**

        - p (float): The value to check.
        - name (str, optional): Name used in the error message.

    **Returns:**

        - float: p as a Python float.

    **Raises:**

        - InvalidParametersError: if p is not a real number in [0, 1]. NaN
          is rejected; values are never clamped.
    """
    if isinstance(p, (bool, np.bool_)):
        raise InvalidParametersError(f"{name} must be a float in [0, 1], got {p!r}")
    try:
        value = float(p)
    except (TypeError, ValueError) as e:
        raise InvalidParametersError(f"{name} must be a float in [0, 1], got {p!r}") from e
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise InvalidParametersError(f"{name} must be a float in [0, 1], got {p!r}")
    return value


def check_sizes(N : int, K : int) -> tuple:
    """
    Validate the network size N and the in-degree K.

    **Returns:**

        - tuple[int, int]: (N, K) as Python ints.

    **Raises:**

        - InvalidParametersError: if N or K is not a non-negative integer, or
          if K > N (K distinct inputs cannot be drawn from fewer than K
          nodes).
    """
    for name, value in (('N', N), ('K', K)):
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
            raise InvalidParametersError(f"{name} must be a non-negative integer, got {value!r}")
        if value < 0:
            raise InvalidParametersError(f"{name} must be a non-negative integer, got {value!r}")
    if K > N:
        raise InvalidParametersError(f"K={K} distinct inputs cannot be drawn from N={N} nodes; K <= N required")
    return int(N), int(K)


def is_list_or_array_of_ints(x : Union[list, np.ndarray],
    required_length : int = None) -> bool:
    """
    Determines if the array-like x contains elements of the 'integer' type.

    **Parameters**:
        - x (list | np.ndarray): The array-like to check.
        - required_length (int | None, optional): The exact length x must have
          to return true. If None, this check is ignored.

    **Returns**:
        - bool: True if x holds elements of type int, bool or their numpy
          counterparts. If required_length is not None, then the length of x
          must equal required_length as well. Returns false otherwise.
    """
    # Case 1: Python list or tuple
    if isinstance(x, (list, tuple)):
        return (required_length is None or len(x) == required_length) and all(isinstance(el, (int, np.integer, np.bool_)) for el in x)

    # Case 2: NumPy array
    if isinstance(x, np.ndarray):
        return (required_length is None or x.shape == (required_length,)) and (np.issubdtype(x.dtype, np.integer) or x.dtype == np.bool_)

    return False
