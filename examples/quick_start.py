"""Quick start example: build a difference kernel and a composite Green's function."""

import math

from kernelfun import (
    Chebyshev,
    Fourier,
    Fun,
    GreensFun,
    Interval,
    JacobiWeight,
    ProductFun,
    tensor,
)


def g(t):
    """A smooth antidiagonal: exp(-t^2)."""
    return math.exp(-t * t)


# Antidiagonal on [-2, 2], targets on [-1, 1]
f = Fun.from_function(g, Chebyshev(Interval(-2, 2)), n=40)
u = v = Chebyshev(Interval(-1, 1))
K = ProductFun.from_antidiagonal(f, u, v, verbose=True)
print(K)

point = (0.3, -0.4)
exact = g(point[1] - point[0])
approx = K(*point)
print(f"\nExact:  {exact:.10f}")
print(f"Approx: {approx:.10f}")
print(f"Error:  {abs(approx - exact):.2e}")

# Weighted singular part plus a smooth remainder
w = JacobiWeight(0.5, 0.5, u)
S = ProductFun.from_antidiagonal(f, w, v)
R = ProductFun.from_function(lambda x, y: x * y, tensor(u, v), shape=(5, 5))
G = GreensFun([S, R])
print(f"\n{G}")
print(f"G{point} = {G(*point):.10f}")
print(f"Integral over the square: {G.apply(lambda k: k.sum()):.10f}")

# Periodic kernel exp(cos(y - x)) on [-pi, pi)
fs = Fourier()
P = GreensFun.from_function(
    lambda x, y: math.exp(math.cos(y - x)), tensor(fs, fs), method="convolution"
)
exact = math.exp(math.cos(point[1] - point[0]))
print(f"\nPeriodic error: {abs(P(*point) - exact):.2e}")
