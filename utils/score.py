import numpy as np


class Score:
    """ RANSAC Scoring """

    def __init__(self, value=0.0):
        self.inlier_number = 0   # 内点数目
        self.value = value       # 得分，越大越好
        self.inliers = None      # 内点掩码
        self.residuals = None    # 全部观测值的残差
        self.threshold = 0.0     # 区分内点和外点使用的阈值
        self.scale = 0.0         # 残差的鲁棒标准差估计

    def __lt__(self, v):
        return self.value < v.value

    def __gt__(self, v):
        return self.value > v.value

    def __eq__(self, v):
        return self.value == v.value


class RansacScoringFunction:
    """ 得分为阈值内的内点数目 """

    def initialScore(self):
        return Score(0.0)

    def getScore(self, residuals, threshold, sample_size):
        """ 求解模型对应的评估得分

        参数
        ----------
        residuals : numpy
            全部观测值对当前模型的残差
        threshold : float
            决定内点和外点的阈值
        sample_size : int
            最小样本大小

        返回
        ----------
        Score
            当前模型参数的评估得分，包含对应的内点掩码
        """
        score = Score()
        score.residuals = residuals
        score.threshold = threshold
        score.inliers = residuals <= threshold
        score.inlier_number = int(np.count_nonzero(score.inliers))
        score.value = float(score.inlier_number)
        return score

    def getWeights(self, score):
        """ 最终拟合时使用的权重，None 表示不加权 """
        return None


class MSACScoringFunction(RansacScoringFunction):
    """ 截断二次损失：每个内点加 1 - r²/t²，等价于最小化 sum(min(r², t²)) """

    def getScore(self, residuals, threshold, sample_size):
        score = Score()
        score.residuals = residuals
        score.threshold = threshold
        score.inliers = residuals <= threshold
        score.inlier_number = int(np.count_nonzero(score.inliers))

        squared_truncated_threshold = threshold * threshold
        squared_residuals = residuals[score.inliers] ** 2
        # 加分: 原始截断二次损失如下：1 - 残差^2/阈值^2
        score.value = float(np.sum(1.0 - squared_residuals / squared_truncated_threshold))
        return score


class LMedSScoringFunction:
    """ 最小中值得分：得分为残差中值的相反数

    内点为残差不超过 inlier_factor * 中值的观测值。
    指定 inlier_threshold 时同时计算阈值内点，取两者中较少（更严格）的一组。
    """

    STD_CONSTANT = 1.4826
    DEFAULT_INLIER_FACTOR = 1.0

    def __init__(self, inlier_factor=DEFAULT_INLIER_FACTOR, inlier_threshold=None):
        self.inlier_factor = inlier_factor
        self.inlier_threshold = inlier_threshold

    def initialScore(self):
        return Score(-np.inf)

    def getScore(self, residuals, threshold, sample_size):
        point_number = len(residuals)
        median_residual = float(np.median(residuals))

        score = Score(-median_residual)
        score.residuals = residuals
        score.threshold = self.inlier_factor * median_residual
        score.scale = self.robustScale(median_residual, point_number, sample_size)

        inliers = residuals <= score.threshold
        if self.inlier_threshold is not None:
            threshold_inliers = residuals <= self.inlier_threshold
            if np.count_nonzero(threshold_inliers) <= np.count_nonzero(inliers):
                inliers = threshold_inliers
        score.inliers = inliers
        score.inlier_number = int(np.count_nonzero(inliers))
        return score

    def robustScale(self, median_residual, point_number, sample_size):
        """ 由残差中值估计的鲁棒标准差 1.4826 (1 + 5 / (n - m)) median """
        correction = 1.0
        if point_number > sample_size:
            correction += 5.0 / (point_number - sample_size)
        return self.STD_CONSTANT * correction * median_residual

    def getWeights(self, score):
        """ Cauchy 权重 1 / (1 + (r / scale)^2)，scale 为 0 时全部取 1 """
        if score.scale <= 0.0:
            return np.ones(len(score.residuals))
        return 1.0 / (1.0 + (score.residuals / score.scale) ** 2)
