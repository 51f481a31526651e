from enum import Enum

import numpy as np

from solver.solver_polynomial_linear import SolverPolynomialLinear, selectWeights
from utils.exceptions import LockedError, NotReadyError


class PolynomialEstimatorType(Enum):
    """ 线性多项式估计器的类型 """
    LMSE_POLYNOMIAL_ESTIMATOR = "lmse"
    WEIGHTED_POLYNOMIAL_ESTIMATOR = "weighted"


class PolynomialEstimatorListener:
    """ 线性多项式估计过程的监听器，默认不做任何事 """

    def onEstimateStart(self, estimator):
        pass

    def onEstimateEnd(self, estimator):
        pass


class PolynomialEstimator:
    """ 线性多项式估计器基类

    由若干观测值（函数值、导数值、积分值）建立关于多项式系数的线性方程组并求解，
    estimate() 执行期间估计器被锁定，任何修改都会抛出 LockedError。
    """

    MIN_DEGREE = 1

    def __init__(self, degree=MIN_DEGREE, evaluations=None, listener=None):
        self.degree = self.MIN_DEGREE
        self.evaluations = None
        self.listener = listener
        self.locked = False

        self._internalSetDegree(degree)
        if evaluations is not None:
            self._internalSetEvaluations(evaluations)

    @staticmethod
    def minNumberOfEvaluations(degree):
        """ 估计 degree 次多项式所需的最少观测值数目 """
        if degree < PolynomialEstimator.MIN_DEGREE:
            raise ValueError("degree must be at least 1")
        return degree + 1

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

    def setDegreeAndEvaluations(self, degree, evaluations):
        """ 同时设置次数和观测值，两者都合法时才修改 """
        self._checkLocked()
        if evaluations is None or len(evaluations) < self.minNumberOfEvaluations(degree):
            raise ValueError("not enough evaluations for the given degree")
        self.degree = degree
        self.evaluations = evaluations

    def getListener(self):
        return self.listener

    def setListener(self, listener):
        self._checkLocked()
        self.listener = listener

    def getMinNumberOfEvaluations(self):
        return self.minNumberOfEvaluations(self.degree)

    def isLocked(self):
        return self.locked

    def isReady(self):
        return self.evaluations is not None and\
            len(self.evaluations) >= self.getMinNumberOfEvaluations()

    def getType(self):
        pass

    def estimate(self):
        """ 估计多项式

        返回
        ----------
        Polynomial
            估计得到的多项式

        异常
        ----------
        LockedError
            估计器已被锁定
        NotReadyError
            估计器尚未准备好
        PolynomialEstimationError
            线性方程组秩亏，无法求解
        """
        self._checkLocked()
        if not self.isReady():
            raise NotReadyError()

        self.locked = True
        try:
            if self.listener is not None:
                self.listener.onEstimateStart(self)
            polynomial = self._solve()
            if self.listener is not None:
                self.listener.onEstimateEnd(self)
        finally:
            self.locked = False
        return polynomial

    def _solve(self):
        """ 由子类实现的求解过程 """
        pass

    def _checkLocked(self):
        if self.locked:
            raise LockedError()

    def _internalSetDegree(self, degree):
        # 次数非法时 minNumberOfEvaluations 抛出 ValueError
        self.minNumberOfEvaluations(degree)
        self.degree = degree

    def _internalSetEvaluations(self, evaluations):
        if evaluations is None or len(evaluations) < self.getMinNumberOfEvaluations():
            raise ValueError("not enough evaluations for the current degree")
        self.evaluations = evaluations


class LMSEPolynomialEstimator(PolynomialEstimator):
    """ 最小二乘多项式估计器

    默认只使用前 degree + 1 个观测值精确求解，
    setLMSESolutionAllowed(True) 后使用全部观测值求最小二乘解。
    """

    DEFAULT_ALLOW_LMSE_SOLUTION = False

    def __init__(self, degree=PolynomialEstimator.MIN_DEGREE, evaluations=None, listener=None):
        super().__init__(degree, evaluations, listener)
        self.allow_lmse_solution = self.DEFAULT_ALLOW_LMSE_SOLUTION

    def isLMSESolutionAllowed(self):
        return self.allow_lmse_solution

    def setLMSESolutionAllowed(self, allowed):
        self._checkLocked()
        self.allow_lmse_solution = allowed

    def getType(self):
        return PolynomialEstimatorType.LMSE_POLYNOMIAL_ESTIMATOR

    def _solve(self):
        solver = SolverPolynomialLinear(self.degree)
        if self.allow_lmse_solution:
            sample_number = len(self.evaluations)
        else:
            sample_number = self.getMinNumberOfEvaluations()
        return solver.estimateModel(self.evaluations,
                                    list(range(sample_number)),
                                    sample_number)[0]


class WeightedPolynomialEstimator(PolynomialEstimator):
    """ 加权多项式估计器

    只使用权重最大的 max_evaluations 个观测值（或前 max_evaluations 个，当不排序时），
    每个方程先归一化再乘以对应权重。
    """

    DEFAULT_MAX_EVALUATIONS = 50
    DEFAULT_SORT_WEIGHTS = True

    def __init__(self, degree=PolynomialEstimator.MIN_DEGREE, evaluations=None, weights=None,
                 listener=None):
        # _internalSetDegree 需要 max_evaluations
        self.max_evaluations = self.DEFAULT_MAX_EVALUATIONS
        super().__init__(degree, None, listener)
        self.weights = None
        self.sort_weights = self.DEFAULT_SORT_WEIGHTS
        if evaluations is not None or weights is not None:
            self._internalSetEvaluationsAndWeights(evaluations, weights)

    def getWeights(self):
        return self.weights

    def setEvaluationsAndWeights(self, evaluations, weights):
        self._checkLocked()
        self._internalSetEvaluationsAndWeights(evaluations, weights)

    def setDegreeEvaluationsAndWeights(self, degree, evaluations, weights):
        self._checkLocked()
        min_evaluations = self.__checkDegree(degree)
        self._checkEvaluationsAndWeights(evaluations, weights, min_evaluations)
        self.degree = degree
        self.evaluations = evaluations
        self.weights = weights

    def getMaxEvaluations(self):
        return self.max_evaluations

    def setMaxEvaluations(self, max_evaluations):
        self._checkLocked()
        if max_evaluations < self.getMinNumberOfEvaluations():
            raise ValueError("max evaluations must be at least degree + 1")
        self.max_evaluations = max_evaluations

    def isSortWeightsEnabled(self):
        return self.sort_weights

    def setSortWeightsEnabled(self, sort_weights):
        self._checkLocked()
        self.sort_weights = sort_weights

    def isReady(self):
        return super().isReady() and self.weights is not None and\
            len(self.weights) == len(self.evaluations)

    def getType(self):
        return PolynomialEstimatorType.WEIGHTED_POLYNOMIAL_ESTIMATOR

    def _solve(self):
        selected = selectWeights(self.weights, self.sort_weights, self.max_evaluations)
        sample = np.flatnonzero(selected)
        solver = SolverPolynomialLinear(self.degree)
        return solver.estimateModel(self.evaluations,
                                    sample,
                                    len(sample),
                                    weights=self.weights)[0]

    def _internalSetDegree(self, degree):
        self.__checkDegree(degree)
        self.degree = degree

    def __checkDegree(self, degree):
        """ 次数合法且 max_evaluations 不少于 degree + 1 时返回最少观测值数目 """
        min_evaluations = self.minNumberOfEvaluations(degree)
        if self.max_evaluations < min_evaluations:
            raise ValueError("max evaluations must be at least degree + 1")
        return min_evaluations

    def _internalSetEvaluationsAndWeights(self, evaluations, weights):
        self._checkEvaluationsAndWeights(evaluations, weights, self.getMinNumberOfEvaluations())
        self.evaluations = evaluations
        self.weights = weights

    @staticmethod
    def _checkEvaluationsAndWeights(evaluations, weights, min_evaluations):
        if evaluations is None or weights is None:
            raise ValueError("evaluations and weights must be provided")
        if len(evaluations) != len(weights):
            raise ValueError("evaluations and weights must have the same length")
        if len(evaluations) < min_evaluations:
            raise ValueError("not enough evaluations for the current degree")


def create(degree=None, evaluations=None, listener=None,
           estimator_type=PolynomialEstimatorType.LMSE_POLYNOMIAL_ESTIMATOR):
    """ 创建线性多项式估计器

    参数
    ----------
    degree : int 可选
        多项式次数，缺省为 1
    evaluations : list 可选
        观测值集合，加权估计器会为其分配单位权重
    listener : PolynomialEstimatorListener 可选
        估计过程监听器
    estimator_type : PolynomialEstimatorType 可选
        估计器类型

    返回
    ----------
    PolynomialEstimator
        创建的估计器
    """
    if degree is None:
        degree = PolynomialEstimator.MIN_DEGREE
    if estimator_type == PolynomialEstimatorType.WEIGHTED_POLYNOMIAL_ESTIMATOR:
        weights = None if evaluations is None else np.ones(len(evaluations))
        return WeightedPolynomialEstimator(degree, evaluations, weights, listener)
    return LMSEPolynomialEstimator(degree, evaluations, listener)
