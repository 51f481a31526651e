from estimator.polynomial_estimator import PolynomialEstimator
from sampler.prosac_sampler import ProsacSampler
from sampler.uniform_sampler import UniformSampler
from utils.score import (LMedSScoringFunction, MSACScoringFunction,
                         RansacScoringFunction)
from utils.termination import (LMedSTermination, PROMedSTermination,
                               ProsacTermination, RansacTermination,
                               computeIterations)

from .ransac import DEFAULT_THRESHOLD
from .robust_estimator import PolynomialRobustEstimator, RobustEstimatorMethod


def _checkThreshold(threshold):
    if threshold <= 0.0:
        raise ValueError("threshold must be greater than 0")


def _checkInlierFactor(inlier_factor):
    if inlier_factor <= 0.0:
        raise ValueError("inlier factor must be greater than 0")


class _ThresholdPolynomialRobustEstimator(PolynomialRobustEstimator):
    """ 使用固定内点阈值的鲁棒估计器 """

    DEFAULT_THRESHOLD = DEFAULT_THRESHOLD

    def __init__(self, degree=PolynomialEstimator.MIN_DEGREE, evaluations=None, listener=None):
        super().__init__(degree, evaluations, listener)
        self.threshold = self.DEFAULT_THRESHOLD

    def getThreshold(self):
        return self.threshold

    def setThreshold(self, threshold):
        self._checkLocked()
        _checkThreshold(threshold)
        self.threshold = threshold

    def _configure(self, settings):
        super()._configure(settings)
        settings.threshold = self.threshold

    def _createSampler(self, random_generator, settings):
        return UniformSampler(self.evaluations, random_generator)

    def _createTermination(self, settings, sampler):
        return RansacTermination(len(self.evaluations), self.getMinNumberOfEvaluations(), settings)


class RANSACPolynomialRobustEstimator(_ThresholdPolynomialRobustEstimator):
    """ RANSAC：保留内点最多的模型 """

    def getMethod(self):
        return RobustEstimatorMethod.RANSAC

    def _createScoringFunction(self):
        return RansacScoringFunction()


class MSACPolynomialRobustEstimator(_ThresholdPolynomialRobustEstimator):
    """ MSAC：保留截断二次损失最小的模型 """

    def getMethod(self):
        return RobustEstimatorMethod.MSAC

    def _createScoringFunction(self):
        return MSACScoringFunction()


class LMedSPolynomialRobustEstimator(PolynomialRobustEstimator):
    """ LMedS：保留残差中值最小的模型

    不需要事先知道内点阈值，估计的阈值小于 stop_threshold 时提前结束。
    """

    DEFAULT_STOP_THRESHOLD = DEFAULT_THRESHOLD
    DEFAULT_INLIER_FACTOR = LMedSScoringFunction.DEFAULT_INLIER_FACTOR

    def __init__(self, degree=PolynomialEstimator.MIN_DEGREE, evaluations=None, listener=None):
        super().__init__(degree, evaluations, listener)
        self.stop_threshold = self.DEFAULT_STOP_THRESHOLD
        self.inlier_factor = self.DEFAULT_INLIER_FACTOR

    def getStopThreshold(self):
        return self.stop_threshold

    def setStopThreshold(self, stop_threshold):
        self._checkLocked()
        _checkThreshold(stop_threshold)
        self.stop_threshold = stop_threshold

    def getInlierFactor(self):
        return self.inlier_factor

    def setInlierFactor(self, inlier_factor):
        self._checkLocked()
        _checkInlierFactor(inlier_factor)
        self.inlier_factor = inlier_factor

    def getMethod(self):
        return RobustEstimatorMethod.LMedS

    def _configure(self, settings):
        super()._configure(settings)
        settings.threshold = self.stop_threshold

    def _createSampler(self, random_generator, settings):
        return UniformSampler(self.evaluations, random_generator)

    def _createScoringFunction(self):
        return LMedSScoringFunction(self.inlier_factor)

    def _createTermination(self, settings, sampler):
        return LMedSTermination(len(self.evaluations), self.getMinNumberOfEvaluations(), settings)


class _ProgressivePolynomialRobustEstimator(PolynomialRobustEstimator):
    """ 按质量得分渐进采样的鲁棒估计器 """

    MAX_OUTLIERS_PROPORTION = ProsacTermination.MAX_OUTLIERS_PROPORTION

    def __init__(self, degree=PolynomialEstimator.MIN_DEGREE, evaluations=None, listener=None,
                 quality_scores=None):
        self.quality_scores = None
        super().__init__(degree, evaluations, listener)
        if quality_scores is not None:
            self._internalSetQualityScores(quality_scores)

    def getQualityScores(self):
        return self.quality_scores

    def setQualityScores(self, quality_scores):
        self._checkLocked()
        self._internalSetQualityScores(quality_scores)

    def setEvaluationsAndQualityScores(self, evaluations, quality_scores):
        """ 同时替换观测值和质量得分，两者长度一致时才修改 """
        self._checkLocked()
        if evaluations is None or len(evaluations) < self.getMinNumberOfEvaluations():
            raise ValueError("not enough evaluations for the current degree")
        if quality_scores is None or len(quality_scores) != len(evaluations):
            raise ValueError("quality scores and evaluations must have the same length")
        self.evaluations = evaluations
        self.quality_scores = quality_scores

    def isReady(self):
        return super().isReady() and self.quality_scores is not None and\
            len(self.quality_scores) == len(self.evaluations)

    def _createSampler(self, random_generator, settings):
        # T_N
        convergence_iterations = min(computeIterations(1.0 - self.MAX_OUTLIERS_PROPORTION,
                                                       self.getMinNumberOfEvaluations(),
                                                       settings.confidence),
                                     settings.max_iteration_number)
        return ProsacSampler(self.quality_scores,
                             self.getMinNumberOfEvaluations(),
                             convergence_iterations,
                             random_generator)

    def _internalSetQualityScores(self, quality_scores):
        if quality_scores is None or len(quality_scores) < self.getMinNumberOfEvaluations():
            raise ValueError("not enough quality scores for the current degree")
        if self.evaluations is not None and len(quality_scores) != len(self.evaluations):
            raise ValueError("quality scores and evaluations must have the same length")
        self.quality_scores = quality_scores

    def _internalSetEvaluations(self, evaluations):
        if evaluations is not None and self.quality_scores is not None and\
                len(evaluations) != len(self.quality_scores):
            raise ValueError("quality scores and evaluations must have the same length")
        super()._internalSetEvaluations(evaluations)


class PROSACPolynomialRobustEstimator(_ProgressivePolynomialRobustEstimator):
    """ PROSAC：质量得分高的观测值优先参与采样的 RANSAC """

    DEFAULT_THRESHOLD = DEFAULT_THRESHOLD

    def __init__(self, degree=PolynomialEstimator.MIN_DEGREE, evaluations=None, listener=None,
                 quality_scores=None):
        super().__init__(degree, evaluations, listener, quality_scores)
        self.threshold = self.DEFAULT_THRESHOLD

    def getThreshold(self):
        return self.threshold

    def setThreshold(self, threshold):
        self._checkLocked()
        _checkThreshold(threshold)
        self.threshold = threshold

    def getMethod(self):
        return RobustEstimatorMethod.PROSAC

    def _configure(self, settings):
        super()._configure(settings)
        settings.threshold = self.threshold

    def _createScoringFunction(self):
        return RansacScoringFunction()

    def _createTermination(self, settings, sampler):
        return ProsacTermination(len(self.evaluations), self.getMinNumberOfEvaluations(),
                                 settings, sampler)


class PROMedSPolynomialRobustEstimator(_ProgressivePolynomialRobustEstimator):
    """ PROMedS：PROSAC 采样调度加 LMedS 评分

    stop_threshold 同时作为内点阈值，内点取 LMedS 内点和阈值内点中较少的一组。
    """

    DEFAULT_STOP_THRESHOLD = DEFAULT_THRESHOLD
    DEFAULT_INLIER_FACTOR = LMedSScoringFunction.DEFAULT_INLIER_FACTOR

    def __init__(self, degree=PolynomialEstimator.MIN_DEGREE, evaluations=None, listener=None,
                 quality_scores=None):
        super().__init__(degree, evaluations, listener, quality_scores)
        self.stop_threshold = self.DEFAULT_STOP_THRESHOLD
        self.inlier_factor = self.DEFAULT_INLIER_FACTOR

    def getStopThreshold(self):
        return self.stop_threshold

    def setStopThreshold(self, stop_threshold):
        self._checkLocked()
        _checkThreshold(stop_threshold)
        self.stop_threshold = stop_threshold

    def getInlierFactor(self):
        return self.inlier_factor

    def setInlierFactor(self, inlier_factor):
        self._checkLocked()
        _checkInlierFactor(inlier_factor)
        self.inlier_factor = inlier_factor

    def getMethod(self):
        return RobustEstimatorMethod.PROMedS

    def _configure(self, settings):
        super()._configure(settings)
        settings.threshold = self.stop_threshold

    def _createScoringFunction(self):
        return LMedSScoringFunction(self.inlier_factor, inlier_threshold=self.stop_threshold)

    def _createTermination(self, settings, sampler):
        return PROMedSTermination(len(self.evaluations), self.getMinNumberOfEvaluations(),
                                  settings, sampler)
