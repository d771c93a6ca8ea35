"""
The secp256k1 curve and its points. The key classes only use this module through multiply_generator,
is_point_on_curve and find_y_from_x.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

__all__ = ["EllipticCurve", "Point", "SECP256K1"]


@dataclass(frozen=True)
class Point:
    """Immutable affine point. The point at infinity is (None, None)"""
    x: Optional[int] = None
    y: Optional[int] = None

    def __post_init__(self):
        if (self.x is None) != (self.y is None):
            raise ValueError("Point at infinity must have both coordinates as None")

    def __bool__(self) -> bool:
        """Point at infinity is falsy"""
        return self.x is not None

    def __iter__(self):
        """Allow tuple unpacking: x, y = point"""
        return iter((self.x, self.y))


class EllipticCurve:

    def __init__(self, a: int, b: int, p: int, order: int, generator: Tuple[int, int] | Point):
        """
        We instantiate an elliptic curve E of the form

            y^2 = x^3 + ax + b (mod p)

        over a prime field with p = 3 (mod 4), so square roots are a single exponentiation. The order refers to
        the order of the cyclic group generated by the generator point.
        """
        if (4 * pow(a, 3) + 27 * pow(b, 2)) % p == 0:
            raise ValueError("Cannot use Singular curve in ECC")
        if p % 4 != 3:
            raise ValueError("Curve prime must be 3 mod 4")

        self.a = a
        self.b = b
        self.p = p
        self.order = order
        self.generator = Point(*generator) if isinstance(generator, tuple) else generator

        # G, 2G, 4G, ... for generator multiplication
        self._generator_doublings = self._precompute_doublings(self.generator)

    def _precompute_doublings(self, point: Point) -> list[Point]:
        doublings = []
        current = point
        for _ in range(self.order.bit_length()):
            doublings.append(current)
            current = self.double_point(current)
        return doublings

    def x_terms(self, x: int) -> int:
        """Compute x^3 + ax + b mod p"""
        return (pow(x, 3, self.p) + self.a * x + self.b) % self.p

    def is_point_on_curve(self, point: Point) -> bool:
        """Returns true if the given point is on the curve. The point at infinity counts as on the curve"""
        if not point:
            return True
        x, y = point
        if not (0 <= x < self.p and 0 <= y < self.p):
            return False
        return (y * y - self.x_terms(x)) % self.p == 0

    def is_x_on_curve(self, x: int) -> bool:
        """Euler's criterion on x^3 + ax + b"""
        rhs = self.x_terms(x)
        return rhs == 0 or pow(rhs, (self.p - 1) // 2, self.p) == 1

    def find_y_from_x(self, x: int, odd: bool = False) -> int:
        """
        Return the y coordinate for x with the requested parity. Raises ValueError if x is not on the curve.
        """
        if not (0 <= x < self.p) or not self.is_x_on_curve(x):
            raise ValueError(f"Given x coordinate {x} is not on the curve.")

        y = pow(self.x_terms(x), (self.p + 1) // 4, self.p)
        if (y & 1) != int(odd):
            y = (-y) % self.p
        return y

    def double_point(self, point: Point) -> Point:
        if not point or point.y == 0:
            return Point()

        x, y = point
        m = (3 * x * x + self.a) * pow(2 * y, -1, self.p) % self.p
        x3 = (m * m - 2 * x) % self.p
        y3 = (m * (x - x3) - y) % self.p
        return Point(x3, y3)

    def add_points(self, point1: Point, point2: Point) -> Point:
        if not point1:
            return point2
        if not point2:
            return point1

        x1, y1 = point1
        x2, y2 = point2
        if x1 == x2:
            # Either P + P or P + (-P)
            return self.double_point(point1) if y1 == y2 else Point()

        m = (y2 - y1) * pow(x2 - x1, -1, self.p) % self.p
        x3 = (m * m - x1 - x2) % self.p
        y3 = (m * (x1 - x3) - y1) % self.p
        return Point(x3, y3)

    def multiply_generator(self, n: int) -> Point:
        """Multiply generator by scalar n using the precomputed doublings"""
        n %= self.order
        result = Point()
        for i, doubling in enumerate(self._generator_doublings):
            if not n >> i:
                break
            if (n >> i) & 1:
                result = self.add_points(result, doubling)
        return result


SECP256K1 = EllipticCurve(
    a=0,
    b=7,
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    order=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    generator=(0x79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798,
               0x483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8)
)
