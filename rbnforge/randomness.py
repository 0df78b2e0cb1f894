#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Randomness providers for network construction and state randomization.

Every random draw made by rbnforge goes through a :class:`RandomnessProvider`
passed in explicitly. The production implementation,
:class:`NumpyRandomnessProvider`, owns its own ``numpy.random.Generator`` and
never reads or reseeds global random state. :class:`ReplayRandomnessProvider`
replays fixed sequences so that construction and randomization can be
reproduced exactly in tests.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np

try:
    import rbnforge.utils as utils
    from rbnforge.exceptions import InvalidParametersError, RandomnessExhaustedError
except ModuleNotFoundError:
    import utils
    from exceptions import InvalidParametersError, RandomnessExhaustedError


__all__ = [
    "RandomnessProvider",
    "NumpyRandomnessProvider",
    "ReplayRandomnessProvider",
]


class RandomnessProvider(ABC):
    """
    The two random primitives needed to build and randomize a network.

    Subclasses must reject invalid arguments with
    :class:`~rbnforge.exceptions.InvalidParametersError` rather than clamp
    them.
    """

    @abstractmethod
    def random_bool(self, p : float) -> bool:
        """
        Perform one Bernoulli trial.

        Parameters
        ----------
        p : float
            Probability of returning True. Must lie in [0, 1].

        Returns
        -------
        bool

        Raises
        ------
        InvalidParametersError
            If ``p`` is NaN or outside [0, 1].
        """

    @abstractmethod
    def random_distinct(self, k : int, n : int) -> np.ndarray:
        """
        Draw ``k`` pairwise-distinct indices from ``range(n)``.

        Parameters
        ----------
        k : int
            Number of indices to draw.
        n : int
            Size of the population.

        Returns
        -------
        np.ndarray[int]
            Array of length ``k``, in the order drawn.

        Raises
        ------
        InvalidParametersError
            If ``k > n`` or either argument is negative.
        """


class NumpyRandomnessProvider(RandomnessProvider):
    """
    Production provider backed by a private ``numpy.random.Generator``.

    Parameters
    ----------
    rng : None, int, np.random.Generator, np.random.RandomState or random.Random, optional
        Source of entropy, coerced with ``utils._coerce_rng``. None draws
        fresh OS entropy; an int seeds a new generator.

    Examples
    --------
    >>> provider = NumpyRandomnessProvider(rng=42)
    >>> provider.random_distinct(3, 10).shape
    (3,)
    """

    def __init__(self, rng=None):
        self.rng = utils._coerce_rng(rng)

    def random_bool(self, p : float) -> bool:
        p = utils.check_probability(p)
        return bool(self.rng.random() < p)

    def random_distinct(self, k : int, n : int) -> np.ndarray:
        n, k = utils.check_sizes(n, k)
        if k == 0:
            return np.array([], dtype=int)
        return np.array(self.rng.choice(n, size=k, replace=False), dtype=int)

    def __repr__(self):
        return f"{type(self).__name__}(rng={self.rng!r})"


class ReplayRandomnessProvider(RandomnessProvider):
    """
    Deterministic provider that replays fixed outcomes.

    Parameters
    ----------
    bools : sequence of bool, optional
        Outcomes returned by successive calls to :meth:`random_bool`. The
        probability argument is validated but otherwise ignored.
    distinct : sequence of sequences of int, optional
        Index draws returned by successive calls to :meth:`random_distinct`.
        Each replayed draw must satisfy the ``(k, n)`` contract of the call
        it answers.
    CYCLE : bool, optional
        If True, both sequences wrap around when exhausted. If False
        (default), running out raises
        :class:`~rbnforge.exceptions.RandomnessExhaustedError`.

    Attributes
    ----------
    n_bool_calls : int
        Number of answered :meth:`random_bool` calls.
    n_distinct_calls : int
        Number of answered :meth:`random_distinct` calls.

    Examples
    --------
    A provider that wires every node to node 0 and fills every truth table
    with False:

    >>> provider = ReplayRandomnessProvider([False], [[0]], CYCLE=True)
    """

    def __init__(self, bools : Sequence = (), distinct : Sequence = (),
                 CYCLE : bool = False):
        self.bools = [bool(b) for b in bools]
        self.distinct = [np.array(draw, dtype=int) for draw in distinct]
        self.CYCLE = CYCLE
        self.n_bool_calls = 0
        self.n_distinct_calls = 0

    def _next(self, values : list, n_calls : int, what : str):
        if n_calls < len(values):
            return values[n_calls]
        if self.CYCLE and len(values) > 0:
            return values[n_calls % len(values)]
        raise RandomnessExhaustedError(f"No {what} left to replay after {n_calls} calls")

    def random_bool(self, p : float) -> bool:
        utils.check_probability(p)
        value = self._next(self.bools, self.n_bool_calls, 'boolean outcomes')
        self.n_bool_calls += 1
        return value

    def random_distinct(self, k : int, n : int) -> np.ndarray:
        n, k = utils.check_sizes(n, k)
        draw = self._next(self.distinct, self.n_distinct_calls, 'index draws')
        if len(draw) != k or len(set(draw.tolist())) != k or np.any(draw < 0) or np.any(draw >= n):
            raise InvalidParametersError(f"Replayed draw {draw.tolist()} is not {k} distinct indices in [0, {n})")
        self.n_distinct_calls += 1
        return draw.copy()
