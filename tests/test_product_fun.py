"""Tests for bivariate ProductFun values."""

from __future__ import annotations

import math

import numpy as np
import pytest

from kernelfun import (
    Chebyshev,
    DomainMismatchError,
    Fourier,
    Fun,
    GreensFun,
    Interval,
    JacobiWeight,
    ProductFun,
    tensor,
)

from conftest import TEST_POINTS_2D


def _smooth(x, y):
    return math.exp(x) * math.sin(y)


@pytest.fixture(scope="module")
def smooth(cheb_product_space):
    return ProductFun.from_function(_smooth, cheb_product_space, shape=(20, 20))


class TestConstruction:
    """Validation and sampling."""

    def test_rejects_vector(self, cheb_product_space):
        with pytest.raises(ValueError, match="2-D"):
            ProductFun([1.0, 2.0], cheb_product_space)

    def test_rejects_univariate_space(self):
        with pytest.raises(TypeError, match="TensorSpace"):
            ProductFun([[1.0]], Chebyshev())

    def test_integer_matrix_cast(self, cheb_product_space):
        F = ProductFun([[1, 2], [3, 4]], cheb_product_space)
        assert F.dtype == np.float64

    @pytest.mark.parametrize("x,y", TEST_POINTS_2D)
    def test_from_function(self, smooth, x, y):
        assert abs(smooth(x, y) - _smooth(x, y)) < 1e-13

    def test_from_function_mixed_space(self):
        ss = tensor(Chebyshev(Interval(0, 1)), Fourier())
        F = ProductFun.from_function(
            lambda x, y: x * x * math.cos(y), ss, shape=(6, 7)
        )
        assert F.shape == (6, 7)
        assert abs(F(0.5, 0.3) - 0.25 * math.cos(0.3)) < 1e-13

    def test_from_function_warns(self, cheb_product_space):
        with pytest.warns(UserWarning, match="under-resolved"):
            ProductFun.from_function(lambda x, y: abs(x - y), cheb_product_space, shape=(8, 8))

    def test_properties(self, smooth):
        assert smooth.shape == (20, 20)
        assert smooth.domain == (Interval(), Interval())
        assert smooth.dtype == np.float64


class TestEvaluation:
    """Pointwise and broadcast evaluation."""

    def test_scalar_returns_scalar(self, smooth):
        assert np.ndim(smooth(0.1, 0.2)) == 0

    def test_broadcast(self, smooth):
        x = np.linspace(-1, 1, 5)
        values = smooth(x[:, None], 0.3)
        assert values.shape == (5, 1)
        np.testing.assert_allclose(values[:, 0], np.exp(x) * math.sin(0.3), atol=1e-13)

    def test_evaluate_alias(self, smooth):
        assert smooth.evaluate(0.4, -0.4) == smooth(0.4, -0.4)


class TestTranspose:
    """F.T(x, y) == F(y, x)."""

    @pytest.mark.parametrize("x,y", TEST_POINTS_2D)
    def test_swaps_variables(self, smooth, x, y):
        assert abs(smooth.T(x, y) - smooth(y, x)) < 1e-14

    def test_swaps_space(self):
        ss = tensor(Chebyshev(), Fourier())
        F = ProductFun(np.arange(6.0).reshape(2, 3), ss)
        Ft = F.transpose()
        assert Ft.shape == (3, 2)
        assert Ft.space.first == Fourier() and Ft.space.second == Chebyshev()

    def test_owns_matrix(self, smooth):
        Ft = smooth.T
        Ft.coefficients[0, 0] = 123.0
        assert smooth.coefficients[0, 0] != 123.0


class TestCalculus:
    """Integration over one or both variables."""

    def test_integrate_x(self, cheb_product_space):
        F = ProductFun.from_function(lambda x, y: x * x * (1 + y), cheb_product_space, shape=(5, 5))
        g = F.integrate(0)
        assert isinstance(g, Fun)
        assert g.space == cheb_product_space.second
        assert abs(g(0.5) - (2.0 / 3.0) * 1.5) < 1e-14

    def test_integrate_y(self, cheb_product_space):
        F = ProductFun.from_function(lambda x, y: x * x * (1 + y), cheb_product_space, shape=(5, 5))
        h = F.integrate(1)
        assert abs(h(0.5) - 0.25 * 2.0) < 1e-14

    def test_sum(self, cheb_product_space):
        F = ProductFun.from_function(lambda x, y: x * x * (1 + y), cheb_product_space, shape=(5, 5))
        assert F.sum() == pytest.approx(4.0 / 3.0, abs=1e-14)

    def test_integrate_periodic(self):
        fs = Fourier()
        F = ProductFun.from_antidiagonal(Fun([1.0, 0.0, 1.0], fs), fs, fs)
        g = F.integrate(0)
        assert abs(g(0.3) - 2 * math.pi) < 1e-13

    def test_integrate_scaled_domain(self):
        ss = tensor(Chebyshev(Interval(0, 2)), Chebyshev(Interval(0, 3)))
        F = ProductFun([[1.0]], ss)
        assert F.sum() == pytest.approx(6.0)

    def test_bad_axis(self, smooth):
        with pytest.raises(ValueError, match="axis"):
            smooth.integrate(2)


class TestArithmetic:
    """Sums, differences and scaling."""

    def test_add_same_space(self, smooth):
        H = smooth + smooth
        assert isinstance(H, ProductFun)
        assert abs(H(0.2, 0.7) - 2 * _smooth(0.2, 0.7)) < 1e-13

    def test_add_pads(self, cheb_product_space):
        A = ProductFun([[1.0]], cheb_product_space)
        B = ProductFun([[0.0, 0.0], [0.0, 1.0]], cheb_product_space)
        np.testing.assert_array_equal((A + B).coefficients, [[1.0, 0.0], [0.0, 1.0]])

    def test_add_different_space_gives_greens(self, smooth):
        weighted = ProductFun([[1.0]], tensor(JacobiWeight(0.5, 0.5), Chebyshev()))
        G = smooth + weighted
        assert isinstance(G, GreensFun)
        assert len(G) == 2
        assert abs(G(0.0, 0.5) - (_smooth(0.0, 0.5) + 1.0)) < 1e-13

    def test_add_domain_mismatch(self, smooth):
        other = ProductFun([[1.0]], tensor(Chebyshev(Interval(0, 1)), Chebyshev()))
        with pytest.raises(DomainMismatchError):
            smooth + other

    def test_sub(self, smooth):
        assert abs((smooth - smooth)(0.3, 0.3)) < 1e-15

    def test_scalar(self, smooth):
        assert abs((2.0 * smooth)(0.1, 0.9) - 2 * _smooth(0.1, 0.9)) < 1e-13
        assert abs((smooth * 3)(0.1, 0.9) - 3 * _smooth(0.1, 0.9)) < 1e-13
        assert abs((smooth / 2)(0.1, 0.9) - 0.5 * _smooth(0.1, 0.9)) < 1e-13
        assert abs((-smooth)(0.1, 0.9) + _smooth(0.1, 0.9)) < 1e-13

    def test_complex_scalar(self, smooth):
        assert np.iscomplexobj((1j * smooth).coefficients)

    def test_non_scalar_rejected(self, smooth):
        with pytest.raises(TypeError):
            smooth * "2"
        with pytest.raises(TypeError):
            smooth * True


class TestPrinting:
    """repr and str."""

    def test_repr(self, cheb_product_space):
        F = ProductFun(np.zeros((2, 3)), cheb_product_space)
        assert repr(F) == (
            "ProductFun(shape=(2, 3), space=Chebyshev([-1.0, 1.0]) ⊗ Chebyshev([-1.0, 1.0]))"
        )

    def test_str(self, cheb_product_space):
        F = ProductFun(np.zeros((2, 3)), cheb_product_space)
        text = str(F)
        assert "2 x 3 coefficients" in text
        assert "Build" not in text

    def test_str_with_build_time(self, exp_antidiagonal):
        u = Chebyshev()
        F = ProductFun.from_antidiagonal(exp_antidiagonal, u, u)
        F.build_time = 0.25
        assert "Build:  0.250s" in str(F)
