import numpy as np
import pytest

from estimator import EstimatorPolynomial
from model import (DerivativePolynomialEvaluation, DirectPolynomialEvaluation,
                   Polynomial)
from ransac import (LMedSPolynomialRobustEstimator,
                    MSACPolynomialRobustEstimator,
                    PolynomialRobustEstimatorListener,
                    PROMedSPolynomialRobustEstimator,
                    PROSACPolynomialRobustEstimator,
                    RANSACPolynomialRobustEstimator, RobustEstimatorMethod,
                    create)
from utils.exceptions import LockedError, NotReadyError, RobustEstimatorError
from utils.uniform_random_generator import UniformRandomGenerator
from utils_helper import (generateEvaluations, generateIntegralEvaluations,
                          generatePolynomial, getCoefficientError)

ABSOLUTE_ERROR = 1e-8
METHODS = list(RobustEstimatorMethod)


def _createEstimator(method, degree, evaluations, quality_scores, seed, listener=None):
    estimator = create(degree, evaluations, listener, quality_scores, method)
    estimator.setRandomGenerator(UniformRandomGenerator(seed))
    return estimator


@pytest.mark.parametrize("method", METHODS)
def test_direct_evaluations_with_outliers(method):
    rng = np.random.default_rng(10)
    polynomial = generatePolynomial(2, rng)
    evaluations, outliers, quality_scores = generateEvaluations(polynomial, 500, rng,
                                                                outlier_ratio=0.2,
                                                                outlier_std=100.0)
    estimator = _createEstimator(method, 2, evaluations, quality_scores, seed=11)
    assert estimator.isReady()
    assert estimator.getMethod() == method

    estimated = estimator.estimate()
    assert getCoefficientError(estimated, polynomial) < ABSOLUTE_ERROR

    inliers = estimator.getInliersData().getInliers()
    assert not np.any(inliers & outliers)
    if method in (RobustEstimatorMethod.RANSAC, RobustEstimatorMethod.MSAC,
                  RobustEstimatorMethod.PROSAC):
        np.testing.assert_array_equal(inliers, ~outliers)
    assert estimator.getInliersData().getNumInliers() == np.count_nonzero(inliers)
    assert np.all(estimator.getInliersData().getResiduals()[inliers] < 1e-6)


@pytest.mark.parametrize("method", METHODS)
def test_direct_and_derivative_evaluations(method):
    rng = np.random.default_rng(20)
    polynomial = generatePolynomial(2, rng)
    evaluations, outliers, quality_scores = generateEvaluations(polynomial, 600, rng,
                                                                outlier_ratio=0.2,
                                                                derivative_ratio=0.3)
    estimator = _createEstimator(method, 2, evaluations, quality_scores, seed=21)

    estimated = estimator.estimate()
    assert getCoefficientError(estimated, polynomial) < ABSOLUTE_ERROR
    assert not np.any(estimator.getInliersData().getInliers() & outliers)


@pytest.mark.parametrize("method", [RobustEstimatorMethod.RANSAC, RobustEstimatorMethod.LMedS,
                                    RobustEstimatorMethod.PROMedS])
def test_integral_and_interval_evaluations(method):
    rng = np.random.default_rng(30)
    polynomial = generatePolynomial(2, rng)
    evaluations = generateIntegralEvaluations(polynomial, 200, rng, integral_order=1)
    outliers = rng.random(200) < 0.2
    for i in np.flatnonzero(outliers):
        evaluations[i].setEvaluation(evaluations[i].getEvaluation() + rng.normal(0.0, 100.0))
    quality_scores = np.where(outliers, 0.5, 1.0)

    estimator = _createEstimator(method, 2, evaluations, quality_scores, seed=31)
    estimated = estimator.estimate()
    assert getCoefficientError(estimated, polynomial) < ABSOLUTE_ERROR


def test_geometric_distance():
    estimator = EstimatorPolynomial(1, use_geometric_distance=False)
    evaluations = [DirectPolynomialEvaluation(0.0, 1.0),
                   DerivativePolynomialEvaluation(0.0, 3.0, 1)]
    estimator.initialize(evaluations)
    line = Polynomial(0.0, 1.0)
    np.testing.assert_allclose(estimator.residuals(line), [1.0, 2.0])

    estimator = EstimatorPolynomial(1, use_geometric_distance=True)
    estimator.initialize(evaluations)
    # 点 (0, 1) 到直线 y = x 的距离，导数观测值仍使用代数距离
    np.testing.assert_allclose(estimator.residuals(line), [1.0 / np.sqrt(2.0), 2.0])


@pytest.mark.parametrize("method", METHODS)
def test_robust_fit_with_geometric_distance(method):
    rng = np.random.default_rng(40)
    polynomial = generatePolynomial(1, rng)
    evaluations, outliers, quality_scores = generateEvaluations(polynomial, 500, rng)
    estimator = _createEstimator(method, 1, evaluations, quality_scores, seed=41)
    estimator.setGeometricDistanceUsed(True)
    assert estimator.isGeometricDistanceUsed()

    assert getCoefficientError(estimator.estimate(), polynomial) < ABSOLUTE_ERROR


class _CountingListener(PolynomialRobustEstimatorListener):

    def __init__(self):
        self.start = 0
        self.end = 0
        self.iterations = []
        self.progress = []
        self.locked_errors = 0

    def onEstimateStart(self, estimator):
        self.start += 1
        assert estimator.isLocked()
        self.__tryMutate(estimator)

    def onEstimateEnd(self, estimator):
        self.end += 1
        self.__tryMutate(estimator)

    def onEstimateNextIteration(self, estimator, iteration):
        self.iterations.append(iteration)

    def onEstimateProgressChange(self, estimator, progress):
        self.progress.append(progress)

    def __tryMutate(self, estimator):
        for mutate in (lambda: estimator.setDegree(3),
                       lambda: estimator.setConfidence(0.5),
                       lambda: estimator.setMaxIterations(10),
                       lambda: estimator.setListener(None),
                       lambda: estimator.estimate()):
            try:
                mutate()
            except LockedError:
                self.locked_errors += 1


@pytest.mark.parametrize("method", METHODS)
def test_listener_and_locking(method):
    rng = np.random.default_rng(50)
    polynomial = generatePolynomial(2, rng)
    evaluations, _, quality_scores = generateEvaluations(polynomial, 300, rng)
    listener = _CountingListener()
    estimator = _createEstimator(method, 2, evaluations, quality_scores, seed=51, listener=listener)
    estimator.setProgressDelta(0.0)

    estimator.estimate()

    assert listener.start == 1
    assert listener.end == 1
    assert listener.locked_errors == 10
    assert listener.iterations == list(range(1, len(listener.iterations) + 1))
    assert listener.progress == sorted(listener.progress)
    assert all(0.0 < p <= 1.0 for p in listener.progress)
    assert not estimator.isLocked()
    assert estimator.getDegree() == 2
    assert estimator.getConfidence() == 0.99


def test_not_ready():
    with pytest.raises(NotReadyError):
        RANSACPolynomialRobustEstimator().estimate()

    evaluations = [DirectPolynomialEvaluation(x, x) for x in range(5)]
    estimator = PROSACPolynomialRobustEstimator(1, evaluations)
    assert not estimator.isReady()
    with pytest.raises(NotReadyError):
        estimator.estimate()
    with pytest.raises(ValueError):
        estimator.setQualityScores(np.ones(4))
    assert estimator.getQualityScores() is None
    assert not estimator.isReady()
    estimator.setQualityScores(np.ones(5))
    assert estimator.isReady()


@pytest.mark.parametrize("estimator_class", [PROSACPolynomialRobustEstimator,
                                             PROMedSPolynomialRobustEstimator])
def test_quality_scores_must_match_evaluations(estimator_class):
    evaluations = [DirectPolynomialEvaluation(x, x) for x in range(10)]
    with pytest.raises(ValueError):
        estimator_class(1, evaluations, None, np.ones(5))

    estimator = estimator_class(1, evaluations, None, np.ones(10))
    with pytest.raises(ValueError):
        estimator.setQualityScores(np.ones(5))
    with pytest.raises(ValueError):
        estimator.setEvaluations(evaluations[:5])
    with pytest.raises(ValueError):
        estimator.setEvaluationsAndQualityScores(evaluations[:5], np.ones(4))
    assert estimator.getEvaluations() is evaluations
    assert len(estimator.getQualityScores()) == 10

    estimator.setEvaluationsAndQualityScores(evaluations[:5], np.ones(5))
    assert len(estimator.getEvaluations()) == 5
    assert estimator.isReady()

    # 先设质量得分再设观测值
    estimator = estimator_class(1, None, None, np.ones(6))
    with pytest.raises(ValueError):
        estimator.setEvaluations(evaluations)
    estimator.setEvaluations(evaluations[:6])
    assert estimator.isReady()


def test_sample_without_constant_term_is_invalid():
    evaluations = [DirectPolynomialEvaluation(0.0, 1.0),
                   DerivativePolynomialEvaluation(1.0, 2.0, 1),
                   DerivativePolynomialEvaluation(2.0, 4.0, 1)]
    estimator = EstimatorPolynomial(2)
    estimator.initialize(evaluations)
    assert not estimator.isValidSample(evaluations, [1, 2])
    assert estimator.isValidSample(evaluations, [0, 1, 2])


def test_invalid_arguments():
    with pytest.raises(ValueError):
        RANSACPolynomialRobustEstimator(0)
    with pytest.raises(ValueError):
        LMedSPolynomialRobustEstimator(2, [DirectPolynomialEvaluation(0.0, 0.0)] * 2)
    with pytest.raises(ValueError):
        PROMedSPolynomialRobustEstimator(2, None, None, [1.0])

    estimator = MSACPolynomialRobustEstimator()
    for confidence in (0.0, 1.0, 1.5):
        with pytest.raises(ValueError):
            estimator.setConfidence(confidence)
    with pytest.raises(ValueError):
        estimator.setMaxIterations(0)
    with pytest.raises(ValueError):
        estimator.setProgressDelta(1.5)
    with pytest.raises(ValueError):
        estimator.setThreshold(0.0)
    with pytest.raises(ValueError):
        estimator.setEvaluations(None)
    assert estimator.getConfidence() == MSACPolynomialRobustEstimator.DEFAULT_CONFIDENCE
    assert estimator.getThreshold() == MSACPolynomialRobustEstimator.DEFAULT_THRESHOLD

    estimator = LMedSPolynomialRobustEstimator()
    with pytest.raises(ValueError):
        estimator.setStopThreshold(-1.0)
    with pytest.raises(ValueError):
        estimator.setInlierFactor(0.0)


def test_defaults():
    estimator = PROMedSPolynomialRobustEstimator()
    assert estimator.getDegree() == 1
    assert estimator.getMinNumberOfEvaluations() == 2
    assert estimator.getConfidence() == 0.99
    assert estimator.getMaxIterations() == 5000
    assert estimator.getProgressDelta() == 0.05
    assert not estimator.isGeometricDistanceUsed()
    assert estimator.getStopThreshold() == 1e-6
    assert estimator.getInlierFactor() == 1.0
    assert estimator.getQualityScores() is None
    assert estimator.getInliersData() is None

    estimator = RANSACPolynomialRobustEstimator()
    estimator.setQualityScores([1.0, 2.0])
    assert estimator.getQualityScores() is None


def test_no_consensus_model():
    # 只有一阶导数观测值时每个最小样本都退化
    evaluations = [DerivativePolynomialEvaluation(x, 1.0, 1) for x in np.linspace(-1.0, 1.0, 20)]
    estimator = RANSACPolynomialRobustEstimator(2, evaluations)
    estimator.setMaxIterations(20)
    with pytest.raises(RobustEstimatorError):
        estimator.estimate()
    assert not estimator.isLocked()


def test_reproducible_with_seed():
    rng = np.random.default_rng(60)
    polynomial = generatePolynomial(3, rng)
    evaluations, _, _ = generateEvaluations(polynomial, 300, rng, outlier_ratio=0.4)

    results = []
    for _ in range(2):
        estimator = _createEstimator(RobustEstimatorMethod.RANSAC, 3, evaluations, None, seed=61)
        results.append(estimator.estimate().getPolyParams())
    np.testing.assert_array_equal(results[0], results[1])
