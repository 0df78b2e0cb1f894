#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import numpy as np
import pytest
import rbnforge


def test_bit_packing_most_significant_bit_first():
    assert rbnforge.bin2dec([1, 0, 1]) == 5
    assert rbnforge.bin2dec([0, 0, 1]) == 1
    assert rbnforge.bin2dec([]) == 0
    assert rbnforge.dec2bin(5, 3) == [1, 0, 1]
    assert rbnforge.dec2bin(0, 0) == []
    for K in range(5):
        for i in range(2**K):
            assert rbnforge.bin2dec(rbnforge.dec2bin(i, K)) == i


def test_left_side_of_truth_table_is_binary_counting_order():
    rows = rbnforge.get_left_side_of_truth_table(2)
    assert rows.tolist() == [[0, 0], [0, 1], [1, 0], [1, 1]]
    assert rbnforge.get_left_side_of_truth_table(0).shape == (1, 0)
    assert rbnforge.get_left_side_of_truth_table(3).shape == (8, 3)


def test_lookup_uses_packed_inputs():
    """
    Input vectors are packed with the first input as most significant bit.
    """
    tt = rbnforge.TruthTable([0, 0, 1, 0])  # true only for (1, 0)

    assert tt.lookup([1, 0]) is True
    assert tt.lookup([0, 1]) is False
    assert tt[2] is True
    assert tt.lookup(np.array([1, 0], dtype=np.uint8)) is True


def test_keys_cover_every_input_vector_once():
    for K in range(5):
        tt = rbnforge.TruthTable(np.zeros(2**K, dtype=int))
        keys = tt.keys()
        assert len(keys) == 2**K
        assert len(set(keys)) == 2**K, "Duplicate truth table keys"
        assert all(len(key) == K for key in keys)


def test_zero_input_table():
    tt = rbnforge.TruthTable([1])

    assert tt.n == 0
    assert len(tt) == 1
    assert tt.lookup([]) is True
    assert tt.to_dict() == {(): True}
    assert tt.is_constant()


def test_malformed_lookups_raise():
    tt = rbnforge.TruthTable([0, 1])

    with pytest.raises(rbnforge.MalformedLookupError):
        tt[2]
    with pytest.raises(rbnforge.MalformedLookupError):
        tt[-1]
    with pytest.raises(rbnforge.MalformedLookupError):
        tt.lookup([0, 1])
    with pytest.raises(rbnforge.MalformedLookupError):
        tt.lookup([])


@pytest.mark.parametrize("f", [[], [0, 1, 1], [0, 2], "01"])
def test_invalid_tables_are_rejected(f):
    with pytest.raises((ValueError, TypeError)):
        rbnforge.TruthTable(f)


def test_truth_table_is_read_only():
    """
    Truth tables are quenched: the outputs cannot be modified in place.
    """
    tt = rbnforge.TruthTable([0, 1, 1, 0])
    with pytest.raises(ValueError):
        tt.f[0] = 1
    with pytest.raises(TypeError):
        tt[0] = 1


def test_equality_and_dict_form():
    a = rbnforge.TruthTable([0, 1, 1, 0])
    b = rbnforge.TruthTable([False, True, True, False])

    assert a == b
    assert hash(a) == hash(b)
    assert a != rbnforge.TruthTable([0, 1, 1, 1])
    assert a.to_dict() == {(0, 0): False, (0, 1): True, (1, 0): True, (1, 1): False}


def test_bias_and_sensitivity():
    xor = rbnforge.TruthTable([0, 1, 1, 0])
    and_ = rbnforge.TruthTable([0, 0, 0, 1])

    assert xor.get_hamming_weight() == 2
    assert xor.get_bias() == 0.5
    assert np.allclose(xor.get_activities(), [1.0, 1.0])
    assert xor.get_average_sensitivity(NORMALIZED=False) == 2.0
    assert xor.get_average_sensitivity() == 1.0

    assert np.allclose(and_.get_activities(), [0.5, 0.5])
    assert and_.get_average_sensitivity(NORMALIZED=False) == 1.0
    assert rbnforge.TruthTable([1]).get_average_sensitivity() == 0.0


def test_to_truth_table_dataframe():
    df = rbnforge.TruthTable([0, 0, 0, 1], name='x3').to_truth_table()

    assert list(df.columns) == ['x0', 'x1', 'x3']
    assert df.shape == (4, 3)
    assert df['x3'].tolist() == [0, 0, 0, 1]
