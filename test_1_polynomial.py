import numpy as np
import pytest

from model import Polynomial


def test_evaluate():
    polynomial = Polynomial(1.0, 2.0, 3.0)
    assert polynomial.evaluate(2.0) == pytest.approx(17.0)
    np.testing.assert_allclose(polynomial.evaluate(np.array([0.0, 1.0])), [1.0, 6.0])
    assert polynomial.getDegree() == 2


def test_construction():
    np.testing.assert_array_equal(Polynomial(np.array([1.0, 2.0])).getPolyParams(), [1.0, 2.0])
    np.testing.assert_array_equal(Polynomial().getPolyParams(), [0.0])
    assert Polynomial(1.0, 2.0, 0.0).getDegree() == 1
    assert Polynomial(0.0, 0.0).getDegree() == 0
    with pytest.raises(ValueError):
        Polynomial().setPolyParams([])


def test_derivatives():
    polynomial = Polynomial(1.0, 2.0, 3.0)
    np.testing.assert_allclose(polynomial.derivative().getPolyParams(), [2.0, 6.0])
    assert polynomial.evaluateDerivative(2.0) == pytest.approx(14.0)
    np.testing.assert_allclose(polynomial.nthDerivative(2).getPolyParams(), [6.0])
    assert polynomial.evaluateNthDerivative(5.0, 2) == pytest.approx(6.0)
    np.testing.assert_allclose(polynomial.nthDerivative(3).getPolyParams(), [0.0])
    with pytest.raises(ValueError):
        polynomial.nthDerivative(0)


def test_integrals():
    polynomial = Polynomial(1.0, 2.0, 3.0)
    np.testing.assert_allclose(polynomial.integration(1.0).getPolyParams(), [1.0, 1.0, 1.0, 1.0])
    np.testing.assert_allclose(polynomial.nthIntegration(2, [1.0, 2.0]).getPolyParams(),
                               [1.0, 2.0, 0.5, 1.0 / 3.0, 0.25])
    np.testing.assert_allclose(polynomial.nthIntegration(2).getPolyParams(),
                               [0.0, 0.0, 0.5, 1.0 / 3.0, 0.25])

    assert polynomial.integrateInterval(0.0, 1.0) == pytest.approx(3.0)
    assert polynomial.nthOrderIntegrateInterval(0.0, 1.0, 2) == pytest.approx(0.5 + 1.0 / 3.0 + 0.25)

    with pytest.raises(ValueError):
        polynomial.nthIntegration(2, [1.0])
    with pytest.raises(ValueError):
        polynomial.nthIntegration(0)


def test_integration_inverts_derivative():
    polynomial = Polynomial(0.5, -1.0, 2.0, 4.0)
    integral = polynomial.nthIntegration(3, [1.0, -2.0, 3.0])
    np.testing.assert_allclose(integral.nthDerivative(3).getPolyParams(), polynomial.getPolyParams())
    # 第 i 个积分常数等于积分多项式在 0 处的 i 阶导数
    assert integral.evaluate(0.0) == pytest.approx(1.0)
    assert integral.evaluateNthDerivative(0.0, 1) == pytest.approx(-2.0)
    assert integral.evaluateNthDerivative(0.0, 2) == pytest.approx(3.0)


def test_arithmetic():
    p1 = Polynomial(1.0, 1.0)
    p2 = Polynomial(1.0, -1.0)
    assert p1.add(p2).evaluate(3.0) == pytest.approx(2.0)
    assert p1.add(p2).getDegree() == 0
    np.testing.assert_allclose(p1.subtract(p2).getPolyParams(), [0.0, 2.0])
    np.testing.assert_allclose(p1.multiply(p2).getPolyParams(), [1.0, 0.0, -1.0])
    np.testing.assert_allclose(p1.multiplyByScalar(3.0).getPolyParams(), [3.0, 3.0])
    # 原多项式不变
    np.testing.assert_allclose(p1.getPolyParams(), [1.0, 1.0])
