#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Random construction of Boolean networks.

All draws go through a :class:`~rbnforge.randomness.RandomnessProvider`. For
each node, in index order, :func:`build` first draws the K input indices and
then one Bernoulli outcome per truth-table row, rows in binary counting order.
Replaying the same provider sequence therefore rebuilds the same network.
"""

##Imports
import numpy as np

from typing import Optional

try:
    import rbnforge.utils as utils
    from rbnforge.network import Network, Node
    from rbnforge.randomness import RandomnessProvider
    from rbnforge.truth_table import TruthTable
except ModuleNotFoundError:
    import utils
    from network import Network, Node
    from randomness import RandomnessProvider
    from truth_table import TruthTable


__all__ = [
    "random_input_ids",
    "random_truth_table",
    "build",
    "random_network",
]


## Wiring and truth tables

def random_input_ids(N : int, K : int, provider : RandomnessProvider) -> np.ndarray:
    """
    Draw the inputs of one node.

    **Parameters:**

        - N (int): Number of nodes in the network.
        - K (int): Number of inputs.
        - provider (RandomnessProvider): Source of randomness.

    **Returns:**

        - np.ndarray[int]: K distinct indices in [0, N). A node may draw
          itself.
    """
    return provider.random_distinct(K, N)


def random_truth_table(K : int, p : float, provider : RandomnessProvider,
    name : str = '') -> TruthTable:
    """
    Draw a truth table over K inputs with bias p.

    Rows are filled in binary counting order of the inputs (most significant
    bit first), one independent ``provider.random_bool(p)`` per row.

    **Parameters:**

        - K (int): Number of inputs.
        - p (float): Probability that a row maps to True.
        - provider (RandomnessProvider): Source of randomness.
        - name (str, optional): Name of the node (default '').

    **Returns:**

        - TruthTable: Table with 2^K rows.
    """
    f = [provider.random_bool(p) for _ in range(2**K)]
    return TruthTable(f, name=name)


def build(N : int, K : int, p : float, provider : RandomnessProvider) -> Network:
    """
    Build a random Boolean network.

    Node i receives ``random_input_ids(N, K, provider)`` and then
    ``random_truth_table(K, p, provider)``, for i = 0, ..., N-1. All states
    start False.

    **Parameters:**

        - N (int): Number of nodes.
        - K (int): Number of inputs per node, 0 <= K <= N.
        - p (float): Bias of the truth tables, in [0, 1].
        - provider (RandomnessProvider): Source of randomness.

    **Returns:**

        - Network: The new network.

    **Raises:**

        - InvalidParametersError: if K > N, N or K is negative, or p lies
          outside [0, 1]. Parameters are checked before any random draw.
    """
    N, K = utils.check_sizes(N, K)
    p = utils.check_probability(p)
    if not isinstance(provider, RandomnessProvider):
        raise TypeError(f"provider must be a RandomnessProvider, got {type(provider)!r}")

    nodes = []
    for i in range(N):
        input_ids = random_input_ids(N, K, provider)
        truth_table = random_truth_table(K, p, provider, name='x'+str(i))
        nodes.append(Node(i, input_ids, truth_table))
    return Network(nodes, K=K, p=p)


def random_network(N : int, K : int, p : float = 0.5, *,
    provider : Optional[RandomnessProvider] = None, rng=None) -> "SynchronousRBN":
    """
    Construct a ready-to-run synchronous random Boolean network.

    Shortcut for ``SynchronousRBN(N, K, p, provider=provider, rng=rng)``.

    **Parameters:**

        - N (int): Number of nodes.
        - K (int): Number of inputs per node.
        - p (float, optional): Bias of the truth tables (default 0.5).
        - provider (RandomnessProvider | None, optional): Source of
          randomness for construction and later randomization.
        - rng (None, optional): Seed or generator for a
          NumpyRandomnessProvider, used if provider is None. Implemented in
          'utils._coerce_rng'.

    **Returns:**

        - SynchronousRBN: The engine wrapping the new network.
    """
    try:
        from rbnforge.rbn import SynchronousRBN
    except ModuleNotFoundError:
        from rbn import SynchronousRBN
    return SynchronousRBN(N, K, p, provider=provider, rng=rng)
