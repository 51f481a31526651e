from enum import Enum

from estimator.estimator_polynomial import EstimatorPolynomial
from estimator.polynomial_estimator import PolynomialEstimator
from utils.exceptions import LockedError, NotReadyError
from utils.uniform_random_generator import UniformRandomGenerator

from .ransac import (DEFAULT_CONFIDENCE, DEFAULT_MAX_ITERATIONS,
                     DEFAULT_PROGRESS_DELTA, RANSAC)


DEFAULT_USE_GEOMETRIC_DISTANCE = False


class RobustEstimatorMethod(Enum):
    """ 鲁棒估计方法 """
    RANSAC = "RANSAC"
    LMedS = "LMedS"
    MSAC = "MSAC"
    PROSAC = "PROSAC"
    PROMedS = "PROMedS"


DEFAULT_ROBUST_METHOD = RobustEstimatorMethod.PROSAC


class PolynomialRobustEstimatorListener:
    """ 鲁棒多项式估计过程的监听器，默认不做任何事 """

    def onEstimateStart(self, estimator):
        pass

    def onEstimateEnd(self, estimator):
        pass

    def onEstimateNextIteration(self, estimator, iteration):
        pass

    def onEstimateProgressChange(self, estimator, progress):
        pass


class PolynomialRobustEstimator:
    """ 鲁棒多项式估计器基类

    观测值中可以包含任意比例的外点，子类决定采样、评分和终止方式。
    estimate() 执行期间估计器被锁定，任何修改都会抛出 LockedError。
    """

    DEFAULT_CONFIDENCE = DEFAULT_CONFIDENCE
    DEFAULT_MAX_ITERATIONS = DEFAULT_MAX_ITERATIONS
    DEFAULT_PROGRESS_DELTA = DEFAULT_PROGRESS_DELTA
    DEFAULT_USE_GEOMETRIC_DISTANCE = DEFAULT_USE_GEOMETRIC_DISTANCE
    DEFAULT_ROBUST_METHOD = DEFAULT_ROBUST_METHOD

    def __init__(self, degree=PolynomialEstimator.MIN_DEGREE, evaluations=None, listener=None):
        self.degree = PolynomialEstimator.MIN_DEGREE
        self.evaluations = None
        self.listener = listener
        self.confidence = self.DEFAULT_CONFIDENCE
        self.max_iterations = self.DEFAULT_MAX_ITERATIONS
        self.progress_delta = self.DEFAULT_PROGRESS_DELTA
        self.use_geometric_distance = self.DEFAULT_USE_GEOMETRIC_DISTANCE
        self.random_generator = None
        self.inliers_data = None
        self.locked = False

        self._internalSetDegree(degree)
        if evaluations is not None:
            self._internalSetEvaluations(evaluations)

    def getDegree(self):
        return self.degree

    def setDegree(self, degree):
        self._checkLocked()
        self._internalSetDegree(degree)

    def getEvaluations(self):
        return self.evaluations

    def setEvaluations(self, evaluations):
        self._checkLocked()
        self._internalSetEvaluations(evaluations)

    def getListener(self):
        return self.listener

    def setListener(self, listener):
        self._checkLocked()
        self.listener = listener

    def getConfidence(self):
        return self.confidence

    def setConfidence(self, confidence):
        self._checkLocked()
        if not 0.0 < confidence < 1.0:
            raise ValueError("confidence must be between 0 and 1 (exclusive)")
        self.confidence = confidence

    def getMaxIterations(self):
        return self.max_iterations

    def setMaxIterations(self, max_iterations):
        self._checkLocked()
        if max_iterations < 1:
            raise ValueError("max iterations must be at least 1")
        self.max_iterations = max_iterations

    def getProgressDelta(self):
        return self.progress_delta

    def setProgressDelta(self, progress_delta):
        self._checkLocked()
        if not 0.0 <= progress_delta <= 1.0:
            raise ValueError("progress delta must be between 0 and 1")
        self.progress_delta = progress_delta

    def isGeometricDistanceUsed(self):
        return self.use_geometric_distance

    def setGeometricDistanceUsed(self, use_geometric_distance):
        self._checkLocked()
        self.use_geometric_distance = use_geometric_distance

    def getRandomGenerator(self):
        return self.random_generator

    def setRandomGenerator(self, random_generator):
        """ 设置采样使用的随机数产生器，用于得到可复现的结果 """
        self._checkLocked()
        self.random_generator = random_generator

    def getQualityScores(self):
        """ 观测值的质量得分，只有 PROSAC 和 PROMedS 使用 """
        return None

    def setQualityScores(self, quality_scores):
        """ 只有 PROSAC 和 PROMedS 使用质量得分，其余方法忽略 """
        self._checkLocked()

    def getInliersData(self):
        """ 最近一次成功 estimate() 的内点数据，之前为 None """
        return self.inliers_data

    def getMinNumberOfEvaluations(self):
        return PolynomialEstimator.minNumberOfEvaluations(self.degree)

    def isLocked(self):
        return self.locked

    def isReady(self):
        return self.evaluations is not None and\
            len(self.evaluations) >= self.getMinNumberOfEvaluations()

    def getMethod(self):
        pass

    def estimate(self):
        """ 鲁棒估计多项式

        返回
        ----------
        Polynomial
            在最佳内点集合上拟合的多项式

        异常
        ----------
        LockedError
            估计器已被锁定
        NotReadyError
            估计器尚未准备好
        RobustEstimatorError
            没有找到一致的模型，或最终拟合失败
        """
        self._checkLocked()
        if not self.isReady():
            raise NotReadyError()

        self.locked = True
        try:
            ransac = RANSAC()
            self._configure(ransac.settings)

            random_generator = self.random_generator
            if random_generator is None:
                random_generator = UniformRandomGenerator()

            estimator = EstimatorPolynomial(self.degree, self.use_geometric_distance)
            main_sampler = self._createSampler(random_generator, ransac.settings)
            termination = self._createTermination(ransac.settings, main_sampler)

            polynomial, inliers_data = ransac.run(self.evaluations,
                                                  estimator,
                                                  main_sampler,
                                                  self._createScoringFunction(),
                                                  termination,
                                                  listener=self.listener,
                                                  caller=self)
            self.inliers_data = inliers_data
            return polynomial
        finally:
            self.locked = False

    def _configure(self, settings):
        settings.confidence = self.confidence
        settings.max_iteration_number = self.max_iterations
        settings.progress_delta = self.progress_delta

    def _createSampler(self, random_generator, settings):
        pass

    def _createScoringFunction(self):
        pass

    def _createTermination(self, settings, sampler):
        pass

    def _checkLocked(self):
        if self.locked:
            raise LockedError()

    def _internalSetDegree(self, degree):
        PolynomialEstimator.minNumberOfEvaluations(degree)
        self.degree = degree

    def _internalSetEvaluations(self, evaluations):
        if evaluations is None or len(evaluations) < self.getMinNumberOfEvaluations():
            raise ValueError("not enough evaluations for the current degree")
        self.evaluations = evaluations
