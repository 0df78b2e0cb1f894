#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Wiring-diagram representation for random Boolean networks.

This module defines the :class:`~rbnforge.WiringDiagram` class, which encodes
which nodes feed which, independently of any truth tables or states. In a
random Boolean network every node has exactly K distinct inputs; self loops
and overlapping input sets between nodes are allowed.
"""

from collections.abc import Sequence

import numpy as np
import networkx as nx


__all__ = [
    "WiringDiagram",
]

class WiringDiagram(object):
    """
    Directed wiring diagram of a random Boolean network.

    Parameters
    ----------
    I : sequence of sequences of int
        Adjacency-list representation of the wiring diagram.
        Entry ``I[i]`` lists, in order, the nodes whose states feed node
        ``i``.
    variables : list[str] or np.ndarray[str], optional
        Names of the nodes. Must have length ``N`` if provided. If None,
        default names ``['x0', 'x1', ..., 'x{N-1}']`` are assigned.

    Attributes
    ----------
    I : list[np.ndarray]
        Read-only input index arrays, one per node.
    variables : np.ndarray[str]
        Names of the nodes.
    N : int
        Number of nodes.
    indegrees : np.ndarray[int]
        Indegree of each node.
    outdegrees : np.ndarray[int]
        Outdegree of each node.

    Examples
    --------
    >>> W = WiringDiagram([[1], [0], [2]])
    >>> W.get_self_loops()
    array([2])
    >>> sorted(map(sorted, W.get_strongly_connected_components()))
    [[0, 1], [2]]
    """

    def __init__(
        self,
        I : Sequence[Sequence[int]],
        variables : list[str] | np.ndarray | None = None,
    ):
        if not isinstance(I, (Sequence, np.ndarray)) or isinstance(I, (str, bytes)):
            raise TypeError("I must be a sequence of sequences of int")

        if variables is not None and len(I) != len(variables):
            raise ValueError("len(I) == len(variables) required if variable names are provided")

        self.I = []
        for regulators in I:
            regulators = np.array(regulators, dtype=int).reshape(-1)
            regulators.setflags(write=False)
            self.I.append(regulators)
        self.N = len(self.I)
        self.indegrees = np.array([len(regulators) for regulators in self.I], dtype=int)

        if variables is None:
            variables = ['x'+str(i) for i in range(self.N)]

        self.variables = np.array(variables, dtype=str)

        self.outdegrees = self.get_outdegrees()

    def __str__(self):
        return (
            f"WiringDiagram(N={self.N}, "
            f"indegrees={self.indegrees.tolist()})"
        )

    def __getitem__(self, index):
        return self.I[index]

    def __repr__(self):
        return f"{type(self).__name__}(N={self.N})"

    def get_outdegrees(self) -> np.ndarray:
        """
        Compute the outdegree of each node.

        The outdegree of a node is the number of nodes it feeds, counting a
        self loop once.

        Returns
        -------
        np.ndarray
            One-dimensional array of length ``N``.
        """
        outdegrees = np.zeros(self.N, dtype=int)
        for regulators in self.I:
            for regulator in regulators:
                outdegrees[regulator] += 1
        return outdegrees

    def get_self_loops(self) -> np.ndarray:
        """Indices of the nodes that list themselves as an input."""
        return np.array([i for i, regulators in enumerate(self.I) if i in regulators], dtype=int)

    def to_DiGraph(self, USE_VARIABLE_NAMES: bool = True) -> nx.DiGraph:
        """
        Convert the wiring diagram into a NetworkX directed graph.

        A directed edge ``u -> v`` indicates that the state of ``u`` is an
        input of ``v``.

        Parameters
        ----------
        USE_VARIABLE_NAMES : bool, optional
            If True (default), nodes are labeled using ``self.variables``.
            If False, nodes are labeled by integer indices ``0, ..., N-1``.

        Returns
        -------
        nx.DiGraph
            Directed graph with all ``N`` nodes, including nodes without
            edges. The position of each input in ``I[v]`` is stored on its
            edge under the key ``'position'``.
        """
        G = nx.DiGraph()

        if USE_VARIABLE_NAMES:
            idx_to_node = {i: str(self.variables[i]) for i in range(self.N)}
        else:
            idx_to_node = {i: i for i in range(self.N)}

        G.add_nodes_from(idx_to_node.values())

        for i in range(self.N):
            target = idx_to_node[i]
            for j, reg in enumerate(self.I[i]):
                G.add_edge(idx_to_node[int(reg)], target, position=j)

        return G

    def get_strongly_connected_components(self) -> list:
        """
        Compute the strongly connected components of the wiring diagram.

        Returns
        -------
        list of set of int
            Strongly connected components as sets of node indices. Every
            node belongs to exactly one component.
        """
        return list(nx.strongly_connected_components(self.to_DiGraph(USE_VARIABLE_NAMES=False)))

    def get_modular_structure(self) -> set[tuple[int, int]]:
        """
        Compute the condensation of the wiring diagram.

        Returns
        -------
        set of tuple of int
            Edges ``(i, j)`` of the directed acyclic graph whose nodes are
            the strongly connected components, indexed as returned by
            ``get_strongly_connected_components``.
        """
        sccs = self.get_strongly_connected_components()

        scc_dict = {}
        for idx, scc in enumerate(sccs):
            for node in scc:
                scc_dict[node] = idx

        dag = set()
        for target, regulators in enumerate(self.I):
            for regulator in regulators:
                src = scc_dict[int(regulator)]
                tgt = scc_dict[target]
                if src != tgt:
                    dag.add((src, tgt))
        return dag
