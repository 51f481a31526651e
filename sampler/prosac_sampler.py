import math as m

import numpy as np

from .sampler import Sampler
from utils.logger import polyransac_logger
from utils.uniform_random_generator import UniformRandomGenerator


class ProsacSampler(Sampler):
    """ PROSAC 渐进采样器 """

    def __init__(self, quality_scores, sample_size, ransac_convergence_iterations=100000,
                 random_generator=None):
        """ 初始化 PORSAC 采样器

        参数
        ----------
        quality_scores : list
            每个观测值的质量得分，得分越高越先被采样
        sample_size : int
            采样的样本数
        ransac_convergence_iterations : int 可选
            prosac 采样与 RANSAC 一致所需的迭代次数 T_N
        random_generator : UniformRandomGenerator 可选
            随机数产生器
        """
        super().__init__(quality_scores)
        if random_generator is None:
            random_generator = UniformRandomGenerator()
        self.random_generator = random_generator

        self.sample_size = sample_size
        self.point_number = len(quality_scores)
        self.ransac_convergence_iterations = ransac_convergence_iterations
        self.kth_sample_number = 0      # prosac 采样迭代次数 t
        self.subset_size = 0            # 当前采样池大小 n
        self.termination_length = 0     # 终止长度 n*
        self.T_n = 0.0                  # 只包含前 n 个点的平均样本数
        self.T_n_prime = 1              # T_n 的整数形式，即增长函数
        self.sorted_indices = None      # 按质量降序排列的观测值序号

        self.initialized = self.initialize(quality_scores)

    def initialize(self, quality_scores):
        """ PROSAC 采样初始化 """
        if self.sample_size > self.point_number:
            return False

        # The data points in U_N are sorted in descending order w.r.t. the quality function
        self.sorted_indices = np.argsort(-np.asarray(quality_scores, dtype=float), kind="stable")

        # Let T_n be an average number of samples from {Mi}i=1...T_N that contain data points from U_n only.
        # compute initial value for T_n
        #                                  n - i
        # T_n = T_N * Product i = 0...m-1 -------, n >= sample size, N = points size
        #                                  N - i
        T_n = self.ransac_convergence_iterations
        for i in range(self.sample_size):
            T_n *= (self.sample_size - i) / (self.point_number - i)
        self.T_n = T_n
        self.T_n_prime = 1

        self.kth_sample_number = 0
        self.subset_size = self.sample_size
        self.termination_length = self.point_number
        return True

    def setTerminationLength(self, termination_length):
        """ 设置终止长度 n*，采样池不会超过前 n* 个观测值 """
        self.termination_length = termination_length

    def sample(self, pool, sample_size):
        """ 根据给定的采样池和样本大小进行采样

        参数
        ----------
        pool : list(int)
            采样的数据集合的序号池，PROSAC 总是在全部观测值上采样
        sample_size : int
            采样的样本数

        返回
        ----------
        list
            采样的观测值原始序号列表
        """
        if not self.initialized or sample_size != self.sample_size:
            polyransac_logger.warning("PROSAC sampler is not initialized for this sample size")
            return []

        self.__incrementIterationNumber()

        # 如果 PROSAC 采样与 RANSAC 一致，则在全部观测值上均匀随机采样
        if self.kth_sample_number > self.T_n_prime:
            subset = self.random_generator.generateUniqueRandomSet(sample_size, max=self.point_number - 1)
        else:
            # 产生 PROSAC 样本 [0, subset_size-2]
            subset = self.random_generator.generateUniqueRandomSet(sample_size - 1, max=self.subset_size - 2)
            # 最后一个索引是当前使用的子集末尾的点的索引
            subset.append(self.subset_size - 1)
        return [int(self.sorted_indices[i]) for i in subset]

    def __incrementIterationNumber(self):
        self.kth_sample_number += 1   # PROSAC 迭代数自增

        # g(t) = min{n : T'_n >= t}，t 超过 T'_n 时将采样池扩大一个点
        if self.kth_sample_number > self.T_n_prime and self.subset_size < self.termination_length:
            T_n_plus1 = self.T_n * (self.subset_size + 1) / (self.subset_size + 1 - self.sample_size)
            self.subset_size += 1   # n = n + 1
            self.T_n_prime += m.ceil(T_n_plus1 - self.T_n)
            self.T_n = T_n_plus1
