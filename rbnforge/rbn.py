#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Synchronous evolution of random Boolean networks.

:class:`SynchronousRBN` owns a :class:`~rbnforge.network.Network` and the
:class:`~rbnforge.randomness.RandomnessProvider` it was built with. It offers
two state-changing operations, :meth:`SynchronousRBN.randomize_state` and
:meth:`SynchronousRBN.advance`, plus read-only projections of the state and a
few analysis helpers that work on copies of the state vector.
"""

import warnings
from collections.abc import Sequence

import numpy as np
import pandas as pd

from typing import Optional

try:
    import rbnforge.utils as utils
    import rbnforge.generate as generate
    from rbnforge.exceptions import InvalidParametersError
    from rbnforge.network import Network
    from rbnforge.randomness import RandomnessProvider, NumpyRandomnessProvider
except ModuleNotFoundError:
    import utils
    import generate
    from exceptions import InvalidParametersError
    from network import Network
    from randomness import RandomnessProvider, NumpyRandomnessProvider


__all__ = [
    "SynchronousRBN",
]


class SynchronousRBN(object):
    """
    A random Boolean network under synchronous updating.

    **Constructor Parameters:**

        - N (int): Number of nodes.
        - K (int): Number of distinct inputs per node, 0 <= K <= N.
        - p (float, optional): Probability that a truth-table row maps to
          True (default 0.5).
        - provider (RandomnessProvider | None, optional): Source of all
          randomness, used for construction and for randomize_state. If
          None, a NumpyRandomnessProvider is created from rng.
        - rng (None, optional): Seed or generator for the default provider,
          implemented in 'utils._coerce_rng'. Ignored (with a warning) if a
          provider is given.

    **Members:**

        - network (Network): Wiring, truth tables and node states. Read-only
          attribute; node states are changed through set_state,
          randomize_state and advance.
        - provider (RandomnessProvider): As passed by the constructor.
        - N (int): Number of nodes.
        - K (int): Number of inputs per node.
        - p (float | None): Bias of the truth tables.

    **Raises:**

        - InvalidParametersError: if K > N, N or K is negative, or p lies
          outside [0, 1].

    **Example:**

        >>> rbn = SynchronousRBN(20, 2, 0.5, rng=1)
        >>> rbn.randomize_state(0.5)
        >>> history = [rbn.advance() for _ in range(10)]
    """

    def __init__(self, N : int, K : int, p : float = 0.5, *,
                 provider : Optional[RandomnessProvider] = None, rng=None):
        self.provider = self._resolve_provider(provider, rng)
        self._network = generate.build(N, K, p, self.provider)
        self._current_row = None

    @classmethod
    def from_network(cls, network : Network, provider : Optional[RandomnessProvider] = None,
                     *, rng=None) -> "SynchronousRBN":
        """
        Wrap an existing network.

        **Parameters:**

            - network (Network): A network, e.g. built by hand with fixed
              wiring and truth tables. The engine takes ownership of it.
            - provider (RandomnessProvider | None, optional): Used by
              randomize_state and the sampling helpers.
            - rng (None, optional): Seed or generator for the default
              provider.

        **Returns:**

            - SynchronousRBN
        """
        if not isinstance(network, Network):
            raise TypeError(f"network must be a Network, got {type(network)!r}")
        result = cls.__new__(cls)
        result.provider = cls._resolve_provider(provider, rng)
        result._network = network
        result._current_row = None
        return result

    @staticmethod
    def _resolve_provider(provider, rng) -> RandomnessProvider:
        if provider is None:
            return NumpyRandomnessProvider(rng)
        if not isinstance(provider, RandomnessProvider):
            raise TypeError(f"provider must be a RandomnessProvider, got {type(provider)!r}")
        if rng is not None:
            warnings.warn('Both provider and rng were given; rng is ignored.', UserWarning)
        return provider

    @property
    def network(self) -> Network:
        """The wrapped network, for inspection. Not meant to be modified."""
        return self._network

    @property
    def N(self) -> int:
        return self._network.N

    @property
    def K(self) -> int:
        return self._network.K

    @property
    def p(self) -> Optional[float]:
        return self._network.p

    def __len__(self):
        return self._network.N

    def __str__(self):
        return f"Synchronous random Boolean network of {self.N} nodes with K={self.K} and p={self.p}"

    def __repr__(self):
        return f"{type(self).__name__}(N={self.N}, K={self.K}, p={self.p})"

    ## State
    def randomize_state(self, activation_probability : float) -> None:
        """
        Overwrite every node's state with an independent random draw.

        Node i, in index order, is set to
        ``provider.random_bool(activation_probability)``; nodes drawing False
        are switched off. Truth tables are not consulted.

        **Parameters:**

            - activation_probability (float): Probability that a node is
              switched on, in [0, 1].

        **Raises:**

            - InvalidParametersError: if activation_probability lies outside
              [0, 1]. No state is changed in that case.
            - RandomnessExhaustedError: if a replaying provider runs out of
              values. All draws are made before any node is assigned, so no
              state is changed in that case either.
        """
        activation_probability = utils.check_probability(activation_probability, 'activation_probability')
        values = [bool(self.provider.random_bool(activation_probability)) for _ in range(self.N)]
        for node, value in zip(self._network.nodes, values):
            node.state = value

    def advance(self) -> np.ndarray:
        """
        Perform exactly one synchronous update step.

        The full state vector is copied first; every node then looks up its
        next state from the copied states of its inputs, so no node observes
        a value written during the same step. Callers needing t steps call
        this method t times.

        **Returns:**

            - np.ndarray[int]: The new state of every node (0 or 1), in node
              order.
        """
        snapshot = self._network.get_states()
        Fx = self._network.update_network_synchronously(snapshot)
        for node, x in zip(self._network.nodes, Fx):
            node.state = bool(x)
        self._current_row = Fx.copy()
        return Fx

    def get_state(self) -> np.ndarray:
        """Copy of the current state vector (0/1 ints), in node order."""
        return self._network.get_states()

    @property
    def current_row(self) -> Optional[np.ndarray]:
        """Copy of the most recent result of advance(), None before the first step."""
        if self._current_row is None:
            return None
        return self._current_row.copy()

    def set_state(self, X : Sequence) -> None:
        """
        Overwrite all node states with a given vector.

        **Parameters:**

            - X (list[int] | np.array[int]): N values, each 0/1 or bool.

        **Raises:**

            - InvalidParametersError: if X does not hold exactly N values
              in {0, 1}.
        """
        if not utils.is_list_or_array_of_ints(X, required_length=self.N):
            raise InvalidParametersError(f"State vector must hold {self.N} integers or booleans")
        X = np.asarray(X, dtype=int)
        if not np.all((X == 0) | (X == 1)):
            raise InvalidParametersError("State vector must only contain 0 and 1")
        for node, x in zip(self._network.nodes, X):
            node.state = bool(x)

    ## Trajectories
    def simulate(self, n_steps : int, AS_DATAFRAME : bool = False):
        """
        Advance n_steps times and collect every row.

        This is a loop over advance(); the engine itself keeps no history.

        **Parameters:**

            - n_steps (int): Number of steps, >= 0.
            - AS_DATAFRAME (bool, optional): If True, return a pandas
              DataFrame with one column per node variable and the step
              number (starting at 1) as index. Default False.

        **Returns:**

            - np.ndarray[int] of shape (n_steps, N), or pd.DataFrame.
        """
        if isinstance(n_steps, (bool, np.bool_)) or not isinstance(n_steps, (int, np.integer)) or n_steps < 0:
            raise InvalidParametersError(f"n_steps must be a non-negative integer, got {n_steps!r}")
        rows = [self.advance() for _ in range(n_steps)]
        trajectory = np.array(rows, dtype=int).reshape(n_steps, self.N)
        if AS_DATAFRAME:
            return pd.DataFrame(trajectory, columns=self._network.variables,
                                index=pd.RangeIndex(1, n_steps + 1, name='step'))
        return trajectory

    def _random_state(self) -> np.ndarray:
        return np.array([self.provider.random_bool(0.5) for _ in range(self.N)], dtype=int)

    ## Robustness measures
    def get_derrida_value(self, nsim : int = 1000, EXACT : bool = False) -> float:
        """
        Estimate the Derrida value of the network.

        The Derrida value is the expected Hamming distance, after one
        synchronous step, between a random state and the same state with one
        random node flipped. Values below 1 indicate the ordered regime,
        values above 1 the chaotic regime.

        **Parameters:**

            - nsim (int, optional): Number of sampled state pairs (default
              1000). Ignored if EXACT.
            - EXACT (bool, optional): If True, return the mean unnormalized
              average sensitivity of the truth tables, which equals the
              Derrida value exactly. Default False.

        **Returns:**

            - float: The (estimated) Derrida value. 0.0 for an empty network.

        **Raises:**

            - InvalidParametersError: if EXACT is False and nsim is not a
              positive integer.

        **References:**

            #. Derrida, B., & Pomeau, Y. (1986). Random networks of automata:
               a simple annealed approximation. Europhysics letters, 1(2), 45.
        """
        if not EXACT and (isinstance(nsim, (bool, np.bool_)) or not isinstance(nsim, (int, np.integer)) or nsim < 1):
            raise InvalidParametersError(f"nsim must be a positive integer, got {nsim!r}")
        if self.N == 0:
            return 0.0
        if EXACT:
            return float(np.mean([tt.get_average_sensitivity(NORMALIZED=False) for tt in self._network.F]))
        hamming_distances = []
        for _ in range(nsim):
            X = self._random_state()
            Y = X.copy()
            index = self.provider.random_distinct(1, self.N)[0]
            Y[index] = 1 - Y[index]
            FX = self._network.update_network_synchronously(X)
            FY = self._network.update_network_synchronously(Y)
            hamming_distances.append(int(np.sum(FX != FY)))
        return float(np.mean(hamming_distances))

    def get_attractors_synchronous(self, nsim : int = 500,
        initial_sample_points : Optional[list] = None,
        n_steps_timeout : int = 1000) -> dict:
        """
        Sample the attractors of the network.

        From each initial state the pure transition function is iterated
        until a state repeats. The engine's own state is not modified.
        States are reported in decimal, node 0 being the most significant
        bit.

        **Parameters:**

            - nsim (int, optional): Number of random initial states drawn
              from the provider (default 500). Ignored if
              initial_sample_points is given.
            - initial_sample_points (list[list[int]] | None, optional):
              Initial states as binary vectors of length N.
            - n_steps_timeout (int, optional): Maximum number of steps per
              initial state (default 1000).

        **Returns:**

            - dict[str:Variant]: A dictionary containing:

                - Attractors (list[list[int]]): Each attractor as the list of
                  states of its cycle.
                - NumberOfAttractors (int): Number of attractors found, a
                  lower bound when sampling.
                - BasinSizes (list[int]): Number of initial states that
                  reached each attractor.
                - AttractorDict (dict[int:int]): Visited state -> index of
                  its attractor.
                - InitialSamplePoints (list[int]): The initial states used,
                  in decimal.
                - NumberOfTimeouts (int): Initial states that did not reach
                  an attractor within n_steps_timeout steps.

        **Raises:**

            - InvalidParametersError: if an initial sample point does not
              hold exactly N values in {0, 1}.
        """
        dictF = dict()
        attractors = []
        basin_sizes = []
        attr_dict = dict()
        sampled_points = []
        n_timeout = 0

        if initial_sample_points is not None:
            nsim = len(initial_sample_points)

        for i in range(nsim):
            if initial_sample_points is None:
                x = self._random_state()
            else:
                x = initial_sample_points[i]
                if not utils.is_list_or_array_of_ints(x, required_length=self.N):
                    raise InvalidParametersError(f"Initial state {i} must hold {self.N} integers")
                if not np.all((np.asarray(x) == 0) | (np.asarray(x) == 1)):
                    raise InvalidParametersError(f"Initial state {i} must only contain 0 and 1")
            xdec = utils.bin2dec(x)
            sampled_points.append(xdec)
            queue = [xdec]
            count = 0
            while count < n_steps_timeout:
                try:
                    fxdec = dictF[xdec]
                except KeyError:
                    fx = self._network.update_network_synchronously(utils.dec2bin(xdec, self.N))
                    fxdec = utils.bin2dec(fx)
                    dictF[xdec] = fxdec
                if fxdec in attr_dict:
                    index_attr = attr_dict[fxdec]
                    basin_sizes[index_attr] += 1
                    attr_dict.update(zip(queue, [index_attr] * len(queue)))
                    break
                if fxdec in queue:
                    index = queue.index(fxdec)
                    attr_dict.update(zip(queue, [len(attractors)] * len(queue)))
                    attractors.append(queue[index:])
                    basin_sizes.append(1)
                    break
                queue.append(fxdec)
                xdec = fxdec
                count += 1
            else:
                n_timeout += 1

        if n_timeout > 0:
            warnings.warn(f'{n_timeout} of {nsim} initial states did not reach an attractor within {n_steps_timeout} steps. '
                          'Try increasing n_steps_timeout.', UserWarning)
        return dict(zip(["Attractors", "NumberOfAttractors", "BasinSizes", "AttractorDict", "InitialSamplePoints", "NumberOfTimeouts"],
                        (attractors, len(attractors), basin_sizes, attr_dict, sampled_points, n_timeout)))
