import numpy as np

from estimator.polynomial_estimator import PolynomialEstimator
from utils.uniform_random_generator import UniformRandomGenerator

from .polynomial_robust_estimators import (LMedSPolynomialRobustEstimator,
                                           MSACPolynomialRobustEstimator,
                                           PROMedSPolynomialRobustEstimator,
                                           PROSACPolynomialRobustEstimator,
                                           RANSACPolynomialRobustEstimator)
from .robust_estimator import DEFAULT_ROBUST_METHOD, RobustEstimatorMethod


def create(degree=None, evaluations=None, listener=None, quality_scores=None,
           method=DEFAULT_ROBUST_METHOD):
    """ 创建鲁棒多项式估计器

    参数
    --------
    degree : int 可选
        多项式次数，缺省为 1
    evaluations : list 可选
        观测值集合，长度至少为 degree + 1
    listener : PolynomialRobustEstimatorListener 可选
        估计过程监听器
    quality_scores : list 可选
        观测值的质量得分，只有 PROSAC 和 PROMedS 使用，长度须与 evaluations 一致；
        为 None 时估计器在 setQualityScores 之前 isReady() 为 False
    method : RobustEstimatorMethod 可选
        鲁棒估计方法，缺省为 PROSAC

    返回
    --------
    PolynomialRobustEstimator
        创建的鲁棒估计器

    异常
    --------
    ValueError
        次数、观测值或质量得分非法，或方法不受支持
    """
    if degree is None:
        degree = PolynomialEstimator.MIN_DEGREE

    if method == RobustEstimatorMethod.RANSAC:
        return RANSACPolynomialRobustEstimator(degree, evaluations, listener)
    if method == RobustEstimatorMethod.MSAC:
        return MSACPolynomialRobustEstimator(degree, evaluations, listener)
    if method == RobustEstimatorMethod.LMedS:
        return LMedSPolynomialRobustEstimator(degree, evaluations, listener)
    if method == RobustEstimatorMethod.PROSAC:
        return PROSACPolynomialRobustEstimator(degree, evaluations, listener, quality_scores)
    if method == RobustEstimatorMethod.PROMedS:
        return PROMedSPolynomialRobustEstimator(degree, evaluations, listener, quality_scores)
    raise ValueError(f"unsupported robust estimator method: {method}")


def fitPolynomial(evaluations, degree=1, method=DEFAULT_ROBUST_METHOD, threshold=None,
                  quality_scores=None, confidence=0.99, max_iters=5000, seed=None):
    """ 由含外点的观测值鲁棒拟合多项式

    参数
    --------
    evaluations : list(PolynomialEvaluation)
        观测值集合
    degree : int
        多项式次数
    method : RobustEstimatorMethod
        鲁棒估计方法
    threshold : float
        决定内点和外点的阈值，LMedS 和 PROMedS 中为停止阈值，缺省时使用各方法的默认值
    quality_scores : list
        观测值的质量得分，PROSAC 和 PROMedS 缺省时所有观测值得分相同
    confidence : float
        置信率
    max_iters : int
        最大迭代次数
    seed : int
        随机种子

    返回
    --------
    Polynomial, numpy
        拟合的多项式，标注内点和外点的 mask
    """
    if quality_scores is None and method in (RobustEstimatorMethod.PROSAC,
                                             RobustEstimatorMethod.PROMedS):
        quality_scores = np.ones(len(evaluations))

    estimator = create(degree, evaluations, quality_scores=quality_scores, method=method)
    estimator.setConfidence(confidence)
    estimator.setMaxIterations(max_iters)
    estimator.setRandomGenerator(UniformRandomGenerator(seed))
    if threshold is not None:
        if method in (RobustEstimatorMethod.LMedS, RobustEstimatorMethod.PROMedS):
            estimator.setStopThreshold(threshold)
        else:
            estimator.setThreshold(threshold)

    polynomial = estimator.estimate()
    mask = estimator.getInliersData().getInliers().astype(int)
    return polynomial, mask
