import numpy as np
import pytest

from model import DirectPolynomialEvaluation
from ransac import (LMedSPolynomialRobustEstimator,
                    MSACPolynomialRobustEstimator,
                    PROMedSPolynomialRobustEstimator,
                    PROSACPolynomialRobustEstimator,
                    RANSACPolynomialRobustEstimator, RobustEstimatorMethod,
                    create, fitPolynomial)
from utils_helper import (generateEvaluations, generatePolynomial,
                          getCoefficientError)

ESTIMATOR_CLASSES = {
    RobustEstimatorMethod.RANSAC: RANSACPolynomialRobustEstimator,
    RobustEstimatorMethod.LMedS: LMedSPolynomialRobustEstimator,
    RobustEstimatorMethod.MSAC: MSACPolynomialRobustEstimator,
    RobustEstimatorMethod.PROSAC: PROSACPolynomialRobustEstimator,
    RobustEstimatorMethod.PROMedS: PROMedSPolynomialRobustEstimator,
}


def test_create_default():
    estimator = create()
    assert isinstance(estimator, PROSACPolynomialRobustEstimator)
    assert estimator.getMethod() == RobustEstimatorMethod.PROSAC
    assert estimator.getDegree() == 1
    assert estimator.getEvaluations() is None


@pytest.mark.parametrize("method", list(RobustEstimatorMethod))
def test_create_every_method(method):
    evaluations = [DirectPolynomialEvaluation(x, 2.0 * x) for x in range(6)]
    estimator = create(2, evaluations, method=method, quality_scores=np.ones(6))
    assert isinstance(estimator, ESTIMATOR_CLASSES[method])
    assert estimator.getMethod() == method
    assert estimator.getDegree() == 2
    assert estimator.getEvaluations() is evaluations
    assert estimator.isReady()


def test_create_validation():
    evaluations = [DirectPolynomialEvaluation(x, x) for x in range(3)]
    with pytest.raises(ValueError):
        create(0, method=RobustEstimatorMethod.RANSAC)
    with pytest.raises(ValueError):
        create(3, evaluations, method=RobustEstimatorMethod.LMedS)
    with pytest.raises(ValueError):
        create(1, evaluations, quality_scores=[1.0, 1.0], method=RobustEstimatorMethod.PROSAC)
    with pytest.raises(ValueError):
        create(1, evaluations, quality_scores=[1.0, 1.0], method=RobustEstimatorMethod.PROMedS)
    with pytest.raises(ValueError):
        create(1, evaluations, method="RANSAC")

    # 渐进方法不传质量得分时尚未准备好
    for method in (RobustEstimatorMethod.PROSAC, RobustEstimatorMethod.PROMedS):
        estimator = create(1, evaluations, method=method)
        assert estimator.getQualityScores() is None
        assert not estimator.isReady()

    # 非渐进方法忽略质量得分
    estimator = create(1, evaluations, quality_scores=[1.0], method=RobustEstimatorMethod.MSAC)
    assert estimator.getQualityScores() is None


@pytest.mark.parametrize("method", list(RobustEstimatorMethod))
def test_fit_polynomial(method):
    rng = np.random.default_rng(70)
    polynomial = generatePolynomial(2, rng)
    evaluations, outliers, _ = generateEvaluations(polynomial, 400, rng)

    estimated, mask = fitPolynomial(evaluations, degree=2, method=method, seed=71)
    assert getCoefficientError(estimated, polynomial) < 1e-8
    assert mask.shape == (400,)
    assert set(np.unique(mask)) <= {0, 1}
    assert not np.any(mask.astype(bool) & outliers)


def test_fit_polynomial_threshold():
    rng = np.random.default_rng(80)
    polynomial = generatePolynomial(1, rng)
    evaluations, outliers, _ = generateEvaluations(polynomial, 200, rng)

    _, mask = fitPolynomial(evaluations, degree=1, method=RobustEstimatorMethod.RANSAC,
                            threshold=1e-3, seed=81)
    np.testing.assert_array_equal(mask.astype(bool), ~outliers)

    with pytest.raises(ValueError):
        fitPolynomial(evaluations, degree=1, method=RobustEstimatorMethod.LMedS, threshold=0.0)
