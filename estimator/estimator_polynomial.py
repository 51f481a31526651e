import numpy as np

from model import PolynomialEvaluationType
from solver.solver_polynomial_linear import buildLinearSystem
from utils.exceptions import PolynomialEstimationError
from utils.logger import polyransac_logger

from .estimator import Estimator
from .polynomial_estimator import LMSEPolynomialEstimator, WeightedPolynomialEstimator


class EstimatorPolynomial(Estimator):
    """ 多项式估计器，供一致性采样迭代调用

    initialize 时把所有观测值转换成线性方程组 A c = b，
    之后每个候选模型的残差都由 |A c - b| 一次性向量化计算。
    """

    def __init__(self, degree=1, use_geometric_distance=False):
        super().__init__()
        self.degree = degree
        self.use_geometric_distance = use_geometric_distance

        self.a = None             # 未归一化的设计矩阵
        self.b = None             # 方程右端向量
        self.x = None             # 每个观测值的横坐标
        self.direct_mask = None   # 直接观测值的掩码

    def initialize(self, evaluations):
        self.a, self.b = buildLinearSystem(evaluations, self.degree)
        self.x = np.array([float(evaluation.getX()) for evaluation in evaluations])
        self.direct_mask = np.array(
            [evaluation.getType() == PolynomialEvaluationType.DIRECT_EVALUATION
             for evaluation in evaluations], dtype=bool)

    def sampleSize(self):
        return self.degree + 1

    def nonMinimalSampleSize(self):
        return self.degree + 1

    def isValidSample(self, evaluations, sample):
        """ 样本中没有任何方程含常数项（例如全是导数观测值）时常数项无法确定 """
        return bool(np.any(self.a[np.asarray(sample), 0] != 0.0))

    def estimateModel(self, evaluations, sample):
        """ 由最小样本精确求解多项式，样本退化时返回空列表 """
        subset = [evaluations[i] for i in sample]
        estimator = LMSEPolynomialEstimator(self.degree, subset)
        try:
            return [estimator.estimate()]
        except PolynomialEstimationError as e:
            polyransac_logger.debug(f"Skipping degenerate sample {list(sample)}: {e}")
            return []

    def estimateModelNonminimal(self, evaluations, sample, sample_number, weights=None):
        """ 根据非最小样本估计多项式

        参数
        ----------
        evaluations : list(PolynomialEvaluation)
            输入的观测值集合
        sample : list
            用于估计模型的观测值序号列表
        sample_number : int
            样本数目
        weights : list 可选
            观测值集合中每个观测值的对应权重，为 None 时做普通最小二乘

        返回
        ----------
        list(Polynomial)
            通过样本估计的模型列表，样本数不足时为空列表

        异常
        ----------
        PolynomialEstimationError
            线性方程组秩亏
        """
        if sample_number < self.nonMinimalSampleSize():
            return []

        indices = list(sample[:sample_number])
        subset = [evaluations[i] for i in indices]
        if weights is None:
            estimator = LMSEPolynomialEstimator(self.degree, subset)
            estimator.setLMSESolutionAllowed(True)
        else:
            estimator = WeightedPolynomialEstimator(self.degree, subset,
                                                    [weights[i] for i in indices])
            # 使用全部样本，不按权重筛选
            estimator.setMaxEvaluations(sample_number)
            estimator.setSortWeightsEnabled(False)
        return [estimator.estimate()]

    def residuals(self, model):
        """ 计算全部观测值到模型的距离

        直接观测值在启用几何距离时使用点到切线的垂直距离，
        其余观测值一律使用代数距离 |a · c - b|。
        """
        coefficients = self.__coefficients(model)
        distances = np.abs(self.a @ coefficients - self.b)
        if not self.use_geometric_distance or not np.any(self.direct_mask):
            return distances

        x = self.x[self.direct_mask]
        y = self.b[self.direct_mask]
        slope = model.evaluateDerivative(x)
        # 点 (x, y) 到 p 在 x 处切线的距离
        distances[self.direct_mask] = np.abs(y - model.evaluate(x)) / np.sqrt(1.0 + slope ** 2)
        return distances

    def __coefficients(self, model):
        """ 将模型系数补齐或截断为 degree + 1 个 """
        params = model.getPolyParams()
        coefficients = np.zeros(self.degree + 1)
        n = min(len(params), self.degree + 1)
        coefficients[:n] = params[:n]
        return coefficients
