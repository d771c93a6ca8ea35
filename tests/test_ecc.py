"""
Testing the Point and EllipticCurve classes and methods
"""
import random

import pytest

from bacwallet.cryptography import SECP256K1, Point

# Affine points of y^2 = x^3 + 7 (mod 11). Together with the point at infinity they form a group of order 12
SMALL_CURVE_POINTS = [(2, 2), (2, 9), (3, 1), (3, 10), (4, 4), (4, 7), (5, 0), (6, 5), (6, 6), (7, 3), (7, 8)]


def test_point_at_infinity(curve):
    """
    The point at infinity is Point() = (None, None). It is falsy and on every curve. A point with a single None
    coordinate can't be constructed
    """
    assert Point() == Point(x=None, y=None), "Point at infinity construction mismatch."
    assert not Point(), "Point at infinity should be falsy"
    assert curve.is_point_on_curve(Point()), "Point at infinity not on curve error"

    with pytest.raises(ValueError):
        Point(x=random.randint(0, 10), y=None)
    with pytest.raises(ValueError):
        Point(x=None, y=random.randint(0, 10))


def test_small_curve_arithmetic(curve):
    """
    We use the values of the known elliptic curve:
        y^2 = x^3 + 7 (mod 11)

    (2,2) + (2,9) = point at infinity
    (2,2) + (3,1) = (7,3)
    """
    for pt in SMALL_CURVE_POINTS:
        assert curve.is_point_on_curve(Point(*pt)), f"Point {pt} should be on the curve"
    assert not curve.is_point_on_curve(Point(1, 1)), "(1,1) is not on the curve"

    assert curve.add_points(Point(2, 2), Point(2, 9)) == Point(), "P + (-P) should be the point at infinity"
    assert curve.add_points(Point(2, 2), Point(3, 1)) == Point(7, 3), "Point addition failed"
    assert curve.double_point(Point(5, 0)) == Point(), "Point of order 2 should double to infinity"

    # Every scalar multiple matches repeated addition
    generator = curve.generator
    running = Point()
    for n in range(1, curve.order + 1):
        running = curve.add_points(running, generator)
        assert curve.multiply_generator(n) == running, f"Generator multiplication failed for n = {n}"
    assert running == Point(), "Order times generator should be the point at infinity"


def test_find_y_from_x(curve):
    """
    Both parities of y are recovered, and x values with no point raise a ValueError
    """
    assert curve.find_y_from_x(2) == 2, "Failed to recover the even y coordinate"
    assert curve.find_y_from_x(2, odd=True) == 9, "Failed to recover the odd y coordinate"

    assert not curve.is_x_on_curve(0), "x = 0 has no point on this curve"
    with pytest.raises(ValueError):
        curve.find_y_from_x(0)
    with pytest.raises(ValueError):
        curve.find_y_from_x(curve.p)


def test_secp256k1_generator():
    """
    Addition and doubling agree with the precomputed generator path
    """
    generator = SECP256K1.generator
    assert SECP256K1.is_point_on_curve(generator), "Generator is not on secp256k1"
    assert SECP256K1.multiply_generator(1) == generator, "1 * G != G"
    assert SECP256K1.multiply_generator(SECP256K1.order) == Point(), "n * G should be the point at infinity"

    two_g = SECP256K1.double_point(generator)
    assert SECP256K1.add_points(two_g, generator) == SECP256K1.multiply_generator(3), "2G + G != 3G"
    assert SECP256K1.find_y_from_x(generator.x) == generator.y, "Failed to recover generator y coordinate"
