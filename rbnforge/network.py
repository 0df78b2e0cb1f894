#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Nodes and networks of a random Boolean network.

A :class:`Network` owns N :class:`Node` objects. Wiring and truth tables are
fixed when the network is created; only the node states change afterwards.
The synchronous transition function :meth:`Network.update_network_synchronously`
is pure: it maps a state vector to the next one without touching the nodes.
"""

from collections.abc import Sequence

import numpy as np

try:
    import rbnforge.utils as utils
    from rbnforge.exceptions import InvalidParametersError, MalformedNetworkError
    from rbnforge.truth_table import TruthTable
    from rbnforge.wiring_diagram import WiringDiagram
except ModuleNotFoundError:
    import utils
    from exceptions import InvalidParametersError, MalformedNetworkError
    from truth_table import TruthTable
    from wiring_diagram import WiringDiagram


__all__ = [
    "Node",
    "Network",
]


class Node(object):
    """
    One position of a random Boolean network.

    Parameters
    ----------
    id : int
        Index of the node in its network.
    input_ids : sequence of int
        Indices of the nodes feeding this node, in the order their states are
        packed for the truth-table lookup.
    truth_table : TruthTable or sequence of int
        Outputs for all ``2^len(input_ids)`` input vectors.
    state : bool, optional
        Initial state (default False).

    Only ``state`` can be assigned after construction; reassigning ``id``,
    ``input_ids`` or ``truth_table`` raises ``AttributeError``.
    """

    __slots__ = ['id', 'input_ids', 'truth_table', 'state']

    def __init__(self, id : int, input_ids : Sequence, truth_table, state : bool = False):
        self.id = int(id)
        self.input_ids = np.array(input_ids, dtype=int).reshape(-1)
        self.input_ids.setflags(write=False)
        if not isinstance(truth_table, TruthTable):
            truth_table = TruthTable(truth_table)
        self.truth_table = truth_table
        self.state = bool(state)

    def __setattr__(self, name, value):
        # only the state may change once a field has been set
        if name != 'state' and hasattr(self, name):
            raise AttributeError(f"Node.{name} cannot be reassigned")
        object.__setattr__(self, name, value)

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return (self.id == other.id and np.array_equal(self.input_ids, other.input_ids)
                and self.truth_table == other.truth_table and self.state == other.state)

    __hash__ = None

    def __repr__(self):
        return (f"{type(self).__name__}(id={self.id}, input_ids={self.input_ids.tolist()}, "
                f"truth_table={self.truth_table!r}, state={self.state})")


class Network(WiringDiagram):
    """
    A random Boolean network: N nodes with K inputs each.

    Parameters
    ----------
    nodes : sequence of Node
        The nodes, node ``i`` at position ``i``.
    K : int, optional
        Number of inputs per node. Inferred from the first node if None; a
        network without nodes defaults to K = 0.
    p : float, optional
        Bias the truth tables were drawn with. None for hand-built networks.

    Attributes
    ----------
    nodes : list[Node]
        As passed by the constructor.
    N : int
        Number of nodes.
    K : int
        Number of inputs per node.
    p : float or None
        As passed by the constructor.

    Raises
    ------
    MalformedNetworkError
        If the nodes violate any structural invariant, see
        :meth:`check_invariants`.
    """

    def __init__(self, nodes : Sequence, K : int | None = None, p : float | None = None):
        nodes = list(nodes)
        if not all(isinstance(node, Node) for node in nodes):
            raise TypeError("nodes must be a sequence of Node objects")
        self.nodes = nodes
        self.N = len(nodes)
        if K is None:
            K = len(nodes[0].input_ids) if nodes else 0
        self.K = int(K)
        self.p = None if p is None else utils.check_probability(p)
        self.check_invariants()
        super().__init__([node.input_ids for node in nodes])

    def __len__(self):
        return self.N

    def __getitem__(self, index):
        return self.nodes[index]

    def __iter__(self):
        return iter(self.nodes)

    def __str__(self):
        return f"Random Boolean network of {self.N} nodes with K={self.K} and p={self.p}"

    def __repr__(self):
        return f"{type(self).__name__}(N={self.N}, K={self.K}, p={self.p})"

    @property
    def F(self) -> list:
        """Truth tables of all nodes, in node order."""
        return [node.truth_table for node in self.nodes]

    def check_invariants(self) -> None:
        """
        Verify the structural invariants of the network.

        Node ``i`` must have ``id == i``, exactly K pairwise-distinct inputs
        in ``[0, N)`` and a truth table over K inputs with ``2^K`` entries.

        Raises
        ------
        MalformedNetworkError
            Naming the first violation found.
        """
        for i, node in enumerate(self.nodes):
            if node.id != i:
                raise MalformedNetworkError(f"Node at position {i} has id {node.id}")
            input_ids = node.input_ids
            if len(input_ids) != self.K:
                raise MalformedNetworkError(f"Node {i} has {len(input_ids)} inputs, expected K={self.K}")
            if len(set(input_ids.tolist())) != len(input_ids):
                raise MalformedNetworkError(f"Node {i} has repeated inputs {input_ids.tolist()}")
            if np.any(input_ids < 0) or np.any(input_ids >= self.N):
                raise MalformedNetworkError(f"Node {i} has inputs {input_ids.tolist()} outside [0, {self.N})")
            if node.truth_table.n != self.K or len(node.truth_table.f) != 2**self.K:
                raise MalformedNetworkError(f"Node {i} has a truth table over {node.truth_table.n} inputs, expected K={self.K}")

    def get_states(self) -> np.ndarray:
        """Copy of the current state vector as 0/1 ints, in node order."""
        return np.array([node.state for node in self.nodes], dtype=int)

    def update_single_node(self, index : int, states_regulators : Sequence) -> int:
        """
        Next state of one node given the states of its inputs.

        Parameters
        ----------
        index : int
            Index of the node.
        states_regulators : sequence of int
            States of the node's inputs, in ``input_ids`` order.

        Returns
        -------
        int
            The node's next state, 0 or 1.

        Raises
        ------
        MalformedLookupError
            If the truth table has no entry for ``states_regulators``.
        """
        return int(self.nodes[index].truth_table.lookup(states_regulators))

    def update_network_synchronously(self, X : Sequence) -> np.ndarray:
        """
        Apply one synchronous step to a state vector.

        Every node reads its inputs from ``X`` only, so all nodes see the same
        prior state regardless of evaluation order. The nodes of the network
        are not modified.

        Parameters
        ----------
        X : sequence of int
            State vector of length N.

        Returns
        -------
        np.ndarray[int]
            New state vector.

        Raises
        ------
        InvalidParametersError
            If ``X`` does not hold exactly N values in {0, 1}.
        """
        X = np.asarray(X)
        if X.shape != (self.N,):
            raise InvalidParametersError(f"State vector must have shape ({self.N},), got {X.shape}")
        if not np.all((X == 0) | (X == 1)):
            raise InvalidParametersError("State vector must only contain 0 and 1")
        X = X.astype(int)
        Fx = np.zeros(self.N, dtype=int)
        for i in range(self.N):
            Fx[i] = self.update_single_node(index = i, states_regulators = X[self.I[i]])
        return Fx
