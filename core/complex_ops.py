"""
core/complex_ops.py

Complex arithmetic primitives used by the transform engine.

Each helper accepts Python complex scalars or numpy complex arrays (elementwise)
and returns a new value; inputs are never modified.
"""

import numpy as np


def complex_add(a, b):
    return (np.real(a) + np.real(b)) + 1j * (np.imag(a) + np.imag(b))


def complex_sub(a, b):
    return (np.real(a) - np.real(b)) + 1j * (np.imag(a) - np.imag(b))


def complex_mul(a, b):
    """
    (a.re*b.re - a.im*b.im) + i*(a.re*b.im + a.im*b.re)
    """
    are, aim = np.real(a), np.imag(a)
    bre, bim = np.real(b), np.imag(b)
    return (are * bre - aim * bim) + 1j * (are * bim + aim * bre)


def conjugate(a):
    return np.real(a) - 1j * np.imag(a)
