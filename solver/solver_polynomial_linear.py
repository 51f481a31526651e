import math

import numpy as np

from model import Polynomial, PolynomialEvaluationType
from solver.solver_engine import SolverEngine
from utils.exceptions import PolynomialEstimationError


def evaluationToRow(evaluation, degree):
    """ 将一个观测值转换为关于多项式系数的线性方程 row · c = rhs

    参数
    ----------
    evaluation : PolynomialEvaluation
        多项式观测值
    degree : int
        待估计多项式的次数

    返回
    ----------
    numpy, float
        长度为 degree + 1 的系数行，方程右端项
    """
    columns = degree + 1
    row = np.zeros(columns)
    evaluation_type = evaluation.getType()

    if evaluation_type == PolynomialEvaluationType.DIRECT_EVALUATION:
        x = float(evaluation.getX())
        for i in range(columns):
            row[i] = x ** i
        rhs = evaluation.getEvaluation()

    elif evaluation_type == PolynomialEvaluationType.DERIVATIVE_EVALUATION:
        x = float(evaluation.getX())
        order = evaluation.getDerivativeOrder()
        # 低于求导阶数的项求导后为 0
        for i in range(order, columns):
            row[i] = math.perm(i, order) * x ** (i - order)
        rhs = evaluation.getEvaluation()

    elif evaluation_type == PolynomialEvaluationType.INTEGRAL_EVALUATION:
        x = float(evaluation.getX())
        order = evaluation.getIntegralOrder()
        constants = evaluation.getConstants()
        # 积分常数部分已知，移到方程右端
        accum = 0.0
        if constants is not None:
            for j in range(order):
                accum += constants[j] / math.factorial(j) * x ** j
        for i in range(columns):
            row[i] = x ** (i + order) / math.perm(i + order, order)
        rhs = evaluation.getEvaluation() - accum

    elif evaluation_type == PolynomialEvaluationType.INTEGRAL_INTERVAL:
        start_x = float(evaluation.getStartX())
        end_x = float(evaluation.getEndX())
        order = evaluation.getIntegralOrder()
        for i in range(columns):
            row[i] = (end_x ** (i + order) - start_x ** (i + order)) / math.perm(i + order, order)
        rhs = evaluation.getEvaluation()

    else:
        raise ValueError(f"unsupported evaluation type: {evaluation_type}")

    return row, float(rhs)


def buildLinearSystem(evaluations, degree):
    """ 构建所有观测值的设计矩阵 A 和右端向量 b（未归一化） """
    a = np.zeros([len(evaluations), degree + 1])
    b = np.zeros(len(evaluations))
    for i, evaluation in enumerate(evaluations):
        a[i], b[i] = evaluationToRow(evaluation, degree)
    return a, b


def normalizeRow(row, rhs, weight=1.0):
    """ 用 [row | rhs] 的范数归一化方程，并乘以权重 """
    norm = math.sqrt(np.dot(row, row) + rhs * rhs)
    if norm == 0.0:
        return row * weight, rhs * weight
    factor = weight / norm
    return row * factor, rhs * factor


def selectWeights(weights, sort_weights, max_evaluations):
    """ 选择参与拟合的观测值

    参数
    ----------
    weights : list
        每个观测值的权重
    sort_weights : bool
        为 True 时保留权重最大的 max_evaluations 个观测值，否则保留前 max_evaluations 个
    max_evaluations : int
        最多保留的观测值数目

    返回
    ----------
    numpy
        与 weights 等长的 bool 掩码，被选中的观测值保持原有相对顺序
    """
    weights = np.asarray(weights, dtype=float)
    selected = np.zeros(len(weights), dtype=bool)
    if sort_weights:
        # 权重由大到小，权重相同时保留靠前的观测值
        indices = np.argsort(-weights, kind="stable")[:max_evaluations]
        selected[indices] = True
    else:
        selected[:max_evaluations] = True
    return selected


def solveLinearSystem(a, b):
    """ 最小二乘求解 min ||A c - b||²，秩亏时抛出 PolynomialEstimationError """
    if not (np.all(np.isfinite(a)) and np.all(np.isfinite(b))):
        raise PolynomialEstimationError("linear system contains non finite values")
    params, _, rank, _ = np.linalg.lstsq(a, b, rcond=None)
    if rank < a.shape[1]:
        raise PolynomialEstimationError(
            f"linear system is rank deficient (rank {rank} < {a.shape[1]})")
    return params


class SolverPolynomialLinear(SolverEngine):
    """ 由多项式观测值线性求解多项式系数 """

    def __init__(self, degree=1):
        super().__init__()
        self.degree = degree

    def sampleSize(self):
        """ 模型参数估计所需的最小样本数 """
        return self.degree + 1

    def estimateModel(self,
                      evaluations,
                      sample=None,
                      sample_number=None,
                      weights=None):
        """ 从给定的样本观测值，加权拟合多项式系数

        参数
        ----------
        evaluations : list(PolynomialEvaluation)
            输入的观测值集合
        sample : list 可选
            用于估计模型的观测值序号列表，缺省时使用全部观测值
        sample_number : int 可选
            使用的样本数目，缺省时为样本列表长度
        weights : list 可选
            观测值集合中每个观测值的对应权重

        返回
        ----------
        list(Polynomial)
            通过样本估计的模型列表
        """
        if sample is None:
            sample = list(range(len(evaluations)))
        if sample_number is None:
            sample_number = len(sample)
        if sample_number < self.sampleSize():
            raise PolynomialEstimationError("not enough evaluations to solve the polynomial")

        a = np.zeros([sample_number, self.degree + 1])
        b = np.zeros(sample_number)
        for i in range(sample_number):
            sample_idx = sample[i]
            weight = 1.0 if weights is None else weights[sample_idx]
            row, rhs = evaluationToRow(evaluations[sample_idx], self.degree)
            a[i], b[i] = normalizeRow(row, rhs, weight)

        return [Polynomial(solveLinearSystem(a, b))]
