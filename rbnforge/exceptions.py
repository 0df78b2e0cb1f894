#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exceptions raised by rbnforge.

Parameter problems are reported eagerly as :class:`InvalidParametersError`.
The remaining classes signal broken invariants of a constructed network and
are not meant to be recovered from.
"""

__all__ = [
    "RBNError",
    "InvalidParametersError",
    "MalformedLookupError",
    "MalformedNetworkError",
    "RandomnessExhaustedError",
]


class RBNError(Exception):
    """Base class of all errors raised by rbnforge."""


class InvalidParametersError(RBNError, ValueError):
    """
    A network size, in-degree, probability or state vector is invalid.

    Raised when K > N, when N or K is negative, when a probability lies
    outside [0, 1], or when a state vector has the wrong shape or values.
    """


class MalformedLookupError(RBNError, LookupError):
    """
    A truth table has no entry for the assembled input vector.

    This cannot happen for networks built by :func:`rbnforge.build`.
    """


class MalformedNetworkError(RBNError):
    """A network violates one of its structural invariants."""


class RandomnessExhaustedError(RBNError):
    """A replaying randomness provider has no values left."""
