#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Quenched truth tables of random Boolean network nodes.

A truth table over K inputs stores one output per K-bit input vector. Input
vectors are packed into an integer with the first input as the most
significant bit, so the outputs live in a numpy array of length 2^K indexed
by that integer.
"""

from collections.abc import Sequence

import numpy as np
import pandas as pd

try:
    import rbnforge.utils as utils
    from rbnforge.exceptions import MalformedLookupError
except ModuleNotFoundError:
    import utils
    from exceptions import MalformedLookupError


__all__ = [
    "TruthTable",
]


class TruthTable(object):
    """
    Immutable map from every K-bit input vector to a Boolean output.

    Parameters
    ----------
    f : sequence of int or bool
        Outputs in binary counting order of the inputs, i.e. ``f[i]`` is the
        output for the input vector ``dec2bin(i, K)``. Its length must be a
        power of two, ``2^K`` with ``K >= 0``.
    name : str, optional
        Name of the node this table updates (default '').

    Attributes
    ----------
    f : np.ndarray[np.uint8]
        Read-only outputs, length ``2^K``.
    n : int
        Number of inputs K.
    variables : np.ndarray[str]
        Input names ``x0 .. x{K-1}``.
    name : str
        As passed by the constructor.

    Examples
    --------
    >>> tt = TruthTable([0, 1])
    >>> tt.lookup([1])
    True
    >>> tt.to_dict()
    {(0,): False, (1,): True}
    """

    __slots__ = ['f', 'n', 'variables', 'name']

    def __init__(self, f : Sequence, name : str = ""):
        if not isinstance(f, (Sequence, np.ndarray)) or isinstance(f, (str, bytes)):
            raise TypeError("f must be a sequence of 0/1 outputs")
        if len(f) == 0:
            raise ValueError("f cannot be empty")
        n = int(np.log2(len(f)))
        if 2**n != len(f):
            raise ValueError(f"f must have length 2^K for some K >= 0, got {len(f)}")
        values = np.array(f)
        if not np.all((values == 0) | (values == 1)):
            raise ValueError("f must only contain 0/1 or False/True")

        self.f = values.astype(np.uint8)
        self.f.setflags(write=False)
        self.n = n
        self.variables = np.array(['x%i' % i for i in range(self.n)])
        self.name = name

    def __len__(self):
        return 2**self.n

    def __getitem__(self, index : int) -> bool:
        """Output for the packed input ``index``."""
        if isinstance(index, (bool, np.bool_)) or not isinstance(index, (int, np.integer)):
            raise MalformedLookupError(f"Truth table keys are packed integers, got {index!r}")
        if not 0 <= index < len(self):
            raise MalformedLookupError(f"No entry {index} in a truth table with {len(self)} rows")
        return bool(self.f[index])

    def __eq__(self, other):
        if not isinstance(other, TruthTable):
            return NotImplemented
        return self.n == other.n and np.array_equal(self.f, other.f)

    def __hash__(self):
        return hash((self.n, self.f.tobytes()))

    def __repr__(self):
        if self.n < 6:
            return f"{type(self).__name__}(f={self.f.tolist()})"
        else:
            return f"{type(self).__name__}(f={self.f})"

    def __str__(self):
        return f"{self.f}"

    def lookup(self, bits : Sequence) -> bool:
        """
        Output for an input bit vector.

        Parameters
        ----------
        bits : sequence of int or bool
            The K input states, first input first.

        Returns
        -------
        bool

        Raises
        ------
        MalformedLookupError
            If ``bits`` does not have length K.
        """
        if len(bits) != self.n:
            raise MalformedLookupError(f"Input vector of length {len(bits)} for a truth table over {self.n} inputs")
        return self[utils.bin2dec(bits)]

    def keys(self) -> list:
        """All K-bit input vectors as tuples, in binary counting order."""
        return [tuple(int(b) for b in row) for row in utils.get_left_side_of_truth_table(self.n)]

    def to_dict(self) -> dict:
        """The table as a dictionary from input tuples to outputs."""
        return dict(zip(self.keys(), map(bool, self.f)))

    def to_truth_table(self) -> pd.DataFrame:
        """
        The full truth table as a pandas DataFrame.

        Each row holds one input combination followed by the output, in a
        column named after the node (``f`` if unnamed).

        Examples
        --------
        >>> TruthTable([0, 0, 0, 1], name='x3').to_truth_table()
           x0  x1  x3
        0   0   0   0
        1   0   1   0
        2   1   0   0
        3   1   1   1
        """
        columns = np.append(self.variables, self.name if self.name != '' else 'f')
        return pd.DataFrame(np.c_[utils.get_left_side_of_truth_table(self.n), self.f],
                            columns=columns)

    def get_hamming_weight(self) -> int:
        """Number of input vectors mapped to True."""
        return int(self.f.sum())

    def get_bias(self) -> float:
        """Fraction of input vectors mapped to True."""
        return self.get_hamming_weight() / len(self)

    def is_constant(self) -> bool:
        """True if all outputs are equal. Always true for K == 0."""
        return bool(np.all(self.f == self.f[0]))

    def get_activities(self) -> np.ndarray:
        """
        Exact activity of each input.

        The activity of input i is the fraction of input vectors for which
        flipping bit i changes the output.

        Returns
        -------
        np.ndarray[float]
            Array of length K.
        """
        size_state_space = 2**self.n
        activities = np.zeros(self.n, dtype=np.float64)
        X = np.arange(size_state_space, dtype=np.uint32)
        # flipping input i is XOR with the bit at position K-1-i
        for i in range(self.n):
            flipped = X ^ (1 << self.n-1-i)
            activities[i] = np.count_nonzero(self.f != self.f[flipped])
        return activities / size_state_space

    def get_average_sensitivity(self, NORMALIZED : bool = True) -> float:
        """
        Exact average sensitivity, the sum of the input activities.

        Parameters
        ----------
        NORMALIZED : bool, optional
            If True (default), divide by K. A table with K == 0 has
            sensitivity 0 either way.

        Returns
        -------
        float
        """
        s = float(self.get_activities().sum())
        if NORMALIZED and self.n > 0:
            return s / self.n
        return s
