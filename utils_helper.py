import matplotlib.pyplot as plt
import numpy as np

from model import (DerivativePolynomialEvaluation, DirectPolynomialEvaluation,
                   IntegralIntervalPolynomialEvaluation,
                   IntegralPolynomialEvaluation, Polynomial)


""" 观测值生成模块 """
def generatePolynomial(degree, rng, scale=1.0):
    return Polynomial(rng.normal(0.0, scale, degree + 1))


def generateEvaluations(polynomial, number, rng, outlier_ratio=0.2, outlier_std=100.0,
                        min_x=-1.0, max_x=1.0, derivative_ratio=0.0):
    """ 生成带外点的多项式观测值

    参数
    --------
    polynomial : Polynomial
        真实多项式
    number : int
        观测值数目
    rng : numpy.random.Generator
        随机数产生器
    outlier_ratio : float
        外点比例
    outlier_std : float
        外点误差的标准差
    min_x, max_x : float
        横坐标取值范围
    derivative_ratio : float
        一阶导数观测值所占比例，其余为直接观测值

    返回
    --------
    list, numpy, numpy
        观测值列表，外点 mask，质量得分（外点得分较低）
    """
    evaluations = []
    outliers = rng.random(number) < outlier_ratio
    for i in range(number):
        x = rng.uniform(min_x, max_x)
        error = rng.normal(0.0, outlier_std) if outliers[i] else 0.0
        if rng.random() < derivative_ratio:
            evaluations.append(DerivativePolynomialEvaluation(
                x, polynomial.evaluateDerivative(x) + error, 1))
        else:
            evaluations.append(DirectPolynomialEvaluation(x, polynomial.evaluate(x) + error))

    quality_scores = 1.0 / (1.0 + np.abs(rng.normal(0.0, 1.0, number)))
    quality_scores[outliers] *= 0.5
    return evaluations, outliers, quality_scores


def generateIntegralEvaluations(polynomial, number, rng, integral_order=1, min_x=-1.0, max_x=1.0):
    """ 生成不含外点的积分和区间积分观测值，两种各占一半 """
    constants = rng.normal(0.0, 1.0, integral_order)
    integral = polynomial.nthIntegration(integral_order, constants)
    evaluations = []
    for i in range(number):
        if i % 2 == 0:
            x = rng.uniform(min_x, max_x)
            evaluations.append(IntegralPolynomialEvaluation(
                x, integral.evaluate(x), constants, integral_order))
        else:
            start_x, end_x = np.sort(rng.uniform(min_x, max_x, 2))
            evaluations.append(IntegralIntervalPolynomialEvaluation(
                start_x, end_x, polynomial.nthOrderIntegrateInterval(start_x, end_x, integral_order),
                integral_order=integral_order))
    return evaluations


""" 误差计算模块 """
def getCoefficientError(polynomial, expected):
    """ 两个多项式系数之差的最大绝对值 """
    params = polynomial.getPolyParams()
    expected_params = expected.getPolyParams()
    length = max(len(params), len(expected_params))
    a = np.zeros(length)
    b = np.zeros(length)
    a[:len(params)] = params
    b[:len(expected_params)] = expected_params
    return float(np.max(np.abs(a - b)))


""" 对比信息绘制模块 """
def drawFit(ax, evaluations, polynomial, mask, expected=None, title=None):
    direct = [e for e in evaluations if isinstance(e, DirectPolynomialEvaluation)]
    direct_mask = np.array([mask[i] for i, e in enumerate(evaluations)
                            if isinstance(e, DirectPolynomialEvaluation)], dtype=bool)
    x = np.array([e.getX() for e in direct])
    y = np.array([e.getEvaluation() for e in direct])

    # 绿色为内点，红色为外点
    ax.scatter(x[~direct_mask], y[~direct_mask], s=4, c='r')
    ax.scatter(x[direct_mask], y[direct_mask], s=4, c='g')

    xs = np.linspace(np.min(x), np.max(x), 200)
    if expected is not None:
        ax.plot(xs, expected.evaluate(xs), 'k--', linewidth=1)
    ax.plot(xs, polynomial.evaluate(xs), 'b', linewidth=1)
    # 外点误差很大，纵轴只显示多项式附近的范围
    fitted = polynomial.evaluate(xs)
    margin = 0.5 * (np.max(fitted) - np.min(fitted)) + 1.0
    ax.set_ylim(np.min(fitted) - margin, np.max(fitted) + margin)
    if title is not None:
        ax.set_title(title)
    return ax


def showFits(results, evaluations, expected, path=None):
    """ 按方法名绘制多个拟合结果 """
    plt.figure(figsize=(12, 8))
    for i, (name, (polynomial, mask)) in enumerate(results.items()):
        ax = plt.subplot(len(results), 1, i + 1)
        drawFit(ax, evaluations, polynomial, mask, expected, title=name)
    plt.tight_layout()
    if path is not None:
        plt.savefig(path)
    plt.show()
