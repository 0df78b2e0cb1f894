#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import numpy as np
import pandas as pd
import pytest
import rbnforge
from rbnforge import Network, Node, SynchronousRBN, ReplayRandomnessProvider


def oscillator(provider=None):
    """Two nodes, each copying the other's previous state."""
    network = Network([
        Node(0, [1], [0, 1]),
        Node(1, [0], [0, 1]),
    ])
    return SynchronousRBN.from_network(network, provider or ReplayRandomnessProvider())


def test_two_node_oscillation():
    """
    Each node copies the other. Forcing node 0 on must make the active
    state ping-pong, which only happens if every node reads the previous
    step's states.
    """
    rbn = oscillator()

    assert rbn.advance().tolist() == [0, 0]
    rbn.set_state([1, 0])
    assert rbn.advance().tolist() == [0, 1]
    assert rbn.advance().tolist() == [1, 0]
    assert rbn.advance().tolist() == [0, 1]
    assert rbn.advance().tolist() == [1, 0]


def test_shift_register():
    """
    Node i copies node i-1 (cyclically). A single active node must move one
    position per step regardless of evaluation order.
    """
    network = Network([Node(i, [(i - 1) % 4], [0, 1]) for i in range(4)])
    rbn = SynchronousRBN.from_network(network)

    rbn.set_state([1, 0, 0, 0])
    rows = [rbn.advance().tolist() for _ in range(4)]
    assert rows == [[0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1], [1, 0, 0, 0]]


def test_single_self_loop_fixed_point():
    network = Network([Node(0, [0], [0, 0])])
    rbn = SynchronousRBN.from_network(network)

    for _ in range(10):
        assert rbn.advance().tolist() == [0]
    rbn.set_state([1])
    assert rbn.advance().tolist() == [0]


def test_single_self_loop_toggle():
    """
    With the identity table the node stays off from off and, once switched
    on, stays on.
    """
    network = Network([Node(0, [0], [0, 1])])
    rbn = SynchronousRBN.from_network(network)

    assert rbn.advance().tolist() == [0]
    rbn.set_state([True])
    for _ in range(5):
        assert rbn.advance().tolist() == [1]


def test_input_order_matters():
    """
    The first input is the most significant bit of the lookup key.
    """
    network = Network([
        Node(0, [0, 1], [0, 0, 1, 1]),   # copies x0
        Node(1, [1, 0], [0, 0, 1, 1]),   # copies x1
        Node(2, [0, 1], [0, 0, 1, 0]),   # x0 and not x1
    ])
    rbn = SynchronousRBN.from_network(network)

    rbn.set_state([1, 0, 0])
    assert rbn.advance().tolist() == [1, 0, 1]
    rbn.set_state([0, 1, 0])
    assert rbn.advance().tolist() == [0, 1, 0]


def test_advance_returns_fresh_rows():
    rbn = oscillator()
    assert rbn.current_row is None

    rbn.set_state([1, 0])
    row = rbn.advance()
    assert rbn.current_row.tolist() == [0, 1]
    row[0] = 1
    assert rbn.get_state().tolist() == [0, 1], "Modifying a returned row changed the network"
    assert rbn.current_row.tolist() == [0, 1]


def test_randomize_state_overwrites():
    """
    randomize_state assigns every node its own draw, switching nodes off as
    well as on.
    """
    network = Network([Node(i, [i], [0, 1]) for i in range(3)])
    provider = ReplayRandomnessProvider([True, False, True])
    rbn = SynchronousRBN.from_network(network, provider)

    rbn.set_state([0, 1, 0])
    rbn.randomize_state(0.5)
    assert rbn.get_state().tolist() == [1, 0, 1]
    assert provider.n_bool_calls == 3


def test_randomize_state_extremes():
    rbn = SynchronousRBN(25, 2, 0.5, rng=0)

    rbn.randomize_state(1.0)
    assert rbn.get_state().tolist() == [1] * 25
    rbn.randomize_state(0.0)
    assert rbn.get_state().tolist() == [0] * 25


def test_randomize_state_rejects_invalid_probability():
    rbn = SynchronousRBN(5, 1, 0.5, rng=0)
    rbn.set_state([1, 0, 1, 0, 1])
    with pytest.raises(rbnforge.InvalidParametersError):
        rbn.randomize_state(1.2)
    assert rbn.get_state().tolist() == [1, 0, 1, 0, 1], "State changed despite invalid probability"


@pytest.mark.parametrize("X", [[0, 1, 0], [0, 2], [0.0, 1.0], "01"])
def test_set_state_rejects_malformed_vectors(X):
    rbn = oscillator()
    with pytest.raises(rbnforge.InvalidParametersError):
        rbn.set_state(X)


def test_simulate_matches_repeated_advance():
    a = SynchronousRBN(15, 2, 0.5, rng=11)
    b = SynchronousRBN(15, 2, 0.5, rng=11)
    a.randomize_state(0.5)
    b.randomize_state(0.5)

    trajectory = a.simulate(12)
    rows = np.array([b.advance() for _ in range(12)])

    assert trajectory.shape == (12, 15)
    assert np.array_equal(trajectory, rows)
    assert np.array_equal(a.get_state(), trajectory[-1])


def test_simulate_as_dataframe():
    rbn = oscillator()
    rbn.set_state([1, 0])
    df = rbn.simulate(3, AS_DATAFRAME=True)

    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ['x0', 'x1']
    assert list(df.index) == [1, 2, 3]
    assert df.values.tolist() == [[0, 1], [1, 0], [0, 1]]
    assert rbn.simulate(0).shape == (0, 2)
    with pytest.raises(rbnforge.InvalidParametersError):
        rbn.simulate(-1)


def test_derrida_value_of_oscillator():
    """
    Flipping one node of a copy network changes exactly one node after one
    step, so the Derrida value is exactly 1.
    """
    rbn = oscillator(rbnforge.NumpyRandomnessProvider(0))
    rbn.set_state([1, 1])

    assert rbn.get_derrida_value(EXACT=True) == 1.0
    assert rbn.get_derrida_value(nsim=200) == 1.0
    assert rbn.get_state().tolist() == [1, 1], "Derrida sampling changed the network state"


def test_derrida_value_of_constant_network():
    rbn = SynchronousRBN(8, 0, 0.5, rng=2)
    assert rbn.get_derrida_value(EXACT=True) == 0.0
    assert rbn.get_derrida_value(nsim=50) == 0.0


def test_derrida_value_order_and_chaos():
    """
    K = 1 networks are ordered and K = 5 networks chaotic at p = 0.5.
    """
    ordered = SynchronousRBN(200, 1, 0.5, rng=0)
    chaotic = SynchronousRBN(200, 5, 0.5, rng=0)

    assert ordered.get_derrida_value(EXACT=True) < 1
    assert chaotic.get_derrida_value(EXACT=True) > 1


def test_attractors_of_oscillator():
    rbn = oscillator()
    rbn.set_state([1, 0])

    result = rbn.get_attractors_synchronous(initial_sample_points=[[0, 0], [0, 1], [1, 0], [1, 1]])

    assert result["NumberOfAttractors"] == 3
    assert result["Attractors"] == [[0], [1, 2], [3]]
    assert result["BasinSizes"] == [1, 2, 1]
    assert result["InitialSamplePoints"] == [0, 1, 2, 3]
    assert result["NumberOfTimeouts"] == 0
    assert rbn.get_state().tolist() == [1, 0], "Attractor search changed the network state"


def test_attractors_sampled_from_provider():
    rbn = SynchronousRBN(8, 2, 0.5, rng=5)
    result = rbn.get_attractors_synchronous(nsim=50)

    assert sum(result["BasinSizes"]) == 50
    assert len(result["InitialSamplePoints"]) == 50
    for attractor in result["Attractors"]:
        # the last state of a cycle maps back to its first
        last = np.array(rbnforge.dec2bin(attractor[-1], 8))
        assert rbnforge.bin2dec(rbn.network.update_network_synchronously(last)) == attractor[0]


def test_attractor_timeout_warns():
    rbn = oscillator()
    with pytest.warns(UserWarning):
        result = rbn.get_attractors_synchronous(initial_sample_points=[[0, 1]], n_steps_timeout=1)
    assert result["NumberOfTimeouts"] == 1
    assert result["NumberOfAttractors"] == 0


def test_malformed_lookup_is_fatal():
    """
    A state vector of the wrong length never reaches the truth tables.
    """
    rbn = oscillator()
    with pytest.raises(rbnforge.InvalidParametersError):
        rbn.network.update_network_synchronously([0, 1, 0])
    with pytest.raises(rbnforge.MalformedLookupError):
        rbn.network.update_single_node(0, [0, 1])


def test_transition_rejects_non_binary_states():
    """
    Values other than 0 and 1 would pack into keys of the wrong row, so the
    transition function refuses them.
    """
    network = Network([
        Node(0, [0, 1], [0, 0, 1, 0]),
        Node(1, [0, 1], [0, 0, 1, 0]),
    ])
    with pytest.raises(rbnforge.InvalidParametersError):
        network.update_network_synchronously([0, 2])
    with pytest.raises(rbnforge.InvalidParametersError):
        network.update_network_synchronously([-1, 1])
    assert network.update_network_synchronously([1, 0]).tolist() == [1, 1]


def test_attractors_reject_non_binary_initial_states():
    rbn = oscillator()
    with pytest.raises(rbnforge.InvalidParametersError):
        rbn.get_attractors_synchronous(initial_sample_points=[[0, 2]])
    with pytest.raises(rbnforge.InvalidParametersError):
        rbn.get_attractors_synchronous(initial_sample_points=[[0, 1], [3, 0]])


def test_randomize_state_is_all_or_nothing():
    """
    If the provider runs out part way through, no node is changed.
    """
    network = Network([Node(i, [i], [0, 1]) for i in range(3)])
    rbn = SynchronousRBN.from_network(network, ReplayRandomnessProvider([True]))

    with pytest.raises(rbnforge.RandomnessExhaustedError):
        rbn.randomize_state(0.5)
    assert rbn.get_state().tolist() == [0, 0, 0], "State was partially overwritten"


@pytest.mark.parametrize("nsim", [0, -5, True, 2.5])
def test_derrida_value_rejects_invalid_nsim(nsim):
    rbn = oscillator(rbnforge.NumpyRandomnessProvider(0))
    with pytest.raises(rbnforge.InvalidParametersError):
        rbn.get_derrida_value(nsim=nsim)
    assert rbn.get_derrida_value(nsim=nsim, EXACT=True) == 1.0


def test_network_attribute_is_read_only():
    rbn = oscillator()
    with pytest.raises(AttributeError):
        rbn.network = Network([Node(0, [0], [0, 1])])
    assert rbn.N == 2


def test_node_wiring_and_table_are_fixed():
    """
    Only a node's state may be assigned after construction.
    """
    node = Node(0, [0], [0, 1])
    with pytest.raises(AttributeError):
        node.truth_table = rbnforge.TruthTable([1, 1])
    with pytest.raises(AttributeError):
        node.input_ids = np.array([1])
    with pytest.raises(AttributeError):
        node.id = 3
    node.state = True
    assert node.state is True
    assert node.truth_table.f.tolist() == [0, 1]
