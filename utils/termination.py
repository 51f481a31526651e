import math
import sys

import numpy as np


def computeIterations(inlier_ratio, sample_size, confidence):
    """ 以 confidence 的概率至少抽到一个全内点样本所需的迭代次数

    参数
    ----------
    inlier_ratio : float
        内点比例 w
    sample_size : int
        最小样本大小 m
    confidence : float
        置信率

    返回
    ----------
    int
        ceil(|log(1 - confidence) / log(1 - w^m)|)，w^m 下溢时为 sys.maxsize
    """
    prob_subset_all_inliers = inlier_ratio ** sample_size
    if abs(prob_subset_all_inliers) < sys.float_info.min or math.isnan(prob_subset_all_inliers):
        return sys.maxsize
    if prob_subset_all_inliers >= 1.0:
        return 0
    log_prob_some_outliers = math.log(1.0 - prob_subset_all_inliers)
    if log_prob_some_outliers == 0.0 or math.isnan(log_prob_some_outliers):
        return sys.maxsize
    return int(math.ceil(abs(math.log(1.0 - confidence) / log_prob_some_outliers)))


class Termination:
    """ 一致性采样迭代的终止条件基类 """

    def __init__(self, point_number, sample_size, settings):
        self.point_number = point_number
        self.sample_size = sample_size
        self.settings = settings

    def shouldContinue(self, statistics, improved):
        """ 根据迭代统计和本次迭代是否找到更好的模型，决定是否继续迭代 """
        pass

    def update(self, score, is_best):
        """ 每个候选模型评估后调用，is_best 表示该模型是否成为目前的最佳模型 """
        pass

    def expectedIterations(self):
        """ 用于计算进度的预计迭代次数 """
        pass


class RansacTermination(Termination):
    """ 经典 RANSAC 终止条件 """

    def __init__(self, point_number, sample_size, settings):
        super().__init__(point_number, sample_size, settings)
        # init H(|L∗|, µ)
        self.max_iteration = sys.maxsize

    def shouldContinue(self, statistics, improved):
        return statistics.iteration_number < self.expectedIterations()

    def update(self, score, is_best):
        if not is_best:
            return
        # 更新最大迭代数
        self.max_iteration = computeIterations(score.inlier_number / self.point_number,
                                               self.sample_size,
                                               self.settings.confidence)

    def expectedIterations(self):
        return min(self.max_iteration, self.settings.max_iteration_number)


class LMedSTermination(Termination):
    """ LMedS 终止条件

    估计的内点阈值小于 stop_threshold 时立即停止，
    否则在没有改进且已达到预计迭代次数时停止。
    """

    def __init__(self, point_number, sample_size, settings):
        super().__init__(point_number, sample_size, settings)
        self.max_iteration = sys.maxsize
        self.estimated_threshold = np.inf

    def shouldContinue(self, statistics, improved):
        iteration_number = statistics.iteration_number
        return iteration_number < self.settings.max_iteration_number and\
            self.estimated_threshold > self.settings.threshold and\
            (improved or iteration_number < self.max_iteration)

    def update(self, score, is_best):
        if not is_best:
            return
        iterations = computeIterations(score.inlier_number / self.point_number,
                                       self.sample_size,
                                       self.settings.confidence)
        self.max_iteration = min(self.max_iteration, iterations)
        self.estimated_threshold = score.threshold

    def expectedIterations(self):
        return min(self.max_iteration, self.settings.max_iteration_number)


class ProsacTermination(Termination):
    """ PROSAC 终止条件：最大性与非随机性

    每当内点数目增加时，在按质量排序的观测值中寻找终止长度 n*，
    并把 n* 通知给 ProsacSampler。
    """

    MAX_OUTLIERS_PROPORTION = 0.8
    ETA0 = 0.05
    BETA = 0.01
    CHI_SQUARED = 2.706

    def __init__(self, point_number, sample_size, settings, sampler,
                 max_outliers_proportion=MAX_OUTLIERS_PROPORTION, eta0=ETA0, beta=BETA):
        super().__init__(point_number, sample_size, settings)
        self.sampler = sampler
        self.eta0 = eta0
        self.beta = beta

        # T_N
        self.max_iteration = min(computeIterations(1.0 - max_outliers_proportion,
                                                   sample_size,
                                                   settings.confidence),
                                 settings.max_iteration_number)
        self.inliers_min = int((1.0 - max_outliers_proportion) * point_number)
        self.inliers_best = 0
        self.termination_length = point_number   # n*
        self.inliers_termination_length = 0      # n* 个观测值中的内点数
        self.k_n_star = self.max_iteration

    def shouldContinue(self, statistics, improved):
        return self._scheduleContinues(statistics.iteration_number)

    def update(self, score, is_best):
        if score.inlier_number > self.inliers_best:
            self.inliers_best = score.inlier_number
            self._updateTerminationLength(score)

    def expectedIterations(self):
        return min(self.k_n_star, self.max_iteration)

    def imin(self, sample_number):
        """ 非随机性约束：错误模型的内点数目的上界 """
        mu = sample_number * self.beta
        sigma = math.sqrt(sample_number * self.beta * (1.0 - self.beta))
        return int(math.ceil(self.sample_size + mu + sigma * math.sqrt(self.CHI_SQUARED)))

    def _scheduleContinues(self, iteration_number):
        return (self.inliers_best < self.inliers_min or iteration_number < self.k_n_star) and\
            iteration_number < self.max_iteration and\
            iteration_number < self.settings.max_iteration_number

    def _updateTerminationLength(self, score):
        """ 由当前内点集合重新选择终止长度 n* """
        sorted_inliers = score.inliers[self.sampler.sorted_indices]

        n_best = self.point_number
        inliers_n_best = score.inlier_number
        epsilon_n_best = inliers_n_best / n_best

        inliers_n_test = score.inlier_number
        for n_test in range(self.point_number, self.sample_size, -1):
            # 先做比例的简单比较，再做卡方检验
            if inliers_n_test * n_best > inliers_n_best * n_test and\
                    inliers_n_test > epsilon_n_best * n_test + math.sqrt(
                        n_test * epsilon_n_best * (1.0 - epsilon_n_best) * self.CHI_SQUARED):
                if inliers_n_test < self.imin(n_test):
                    break
                n_best = n_test
                inliers_n_best = inliers_n_test
                epsilon_n_best = inliers_n_best / n_best
            inliers_n_test -= int(sorted_inliers[n_test - 1])

        if inliers_n_best * self.termination_length > self.inliers_termination_length * n_best:
            self.termination_length = n_best
            self.inliers_termination_length = inliers_n_best
            self.k_n_star = computeIterations(inliers_n_best / n_best,
                                              self.sample_size,
                                              1.0 - self.eta0)
            self.sampler.setTerminationLength(n_best)


class PROMedSTermination(ProsacTermination):
    """ PROMedS 终止条件：LMedS 的阈值停止条件加 PROSAC 的采样调度 """

    def __init__(self, point_number, sample_size, settings, sampler, **kwargs):
        super().__init__(point_number, sample_size, settings, sampler, **kwargs)
        self.estimated_threshold = np.inf

    def shouldContinue(self, statistics, improved):
        iteration_number = statistics.iteration_number
        should_continue = iteration_number < self.settings.max_iteration_number and\
            self.estimated_threshold > self.settings.threshold
        if not improved:
            should_continue = should_continue and self._scheduleContinues(iteration_number)
        return should_continue

    def update(self, score, is_best):
        if is_best:
            self.estimated_threshold = score.threshold
        super().update(score, is_best)
