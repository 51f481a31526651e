import numpy as np

from utils.exceptions import PolynomialEstimationError, RobustEstimatorError
from utils.logger import polyransac_logger


DEFAULT_CONFIDENCE = 0.99
DEFAULT_MAX_ITERATIONS = 5000
DEFAULT_THRESHOLD = 1e-6
DEFAULT_PROGRESS_DELTA = 0.05


class _Settings:

    def __init__(self):
        self.do_final_least_squares = True               # 是否在最佳内点集合上执行最后的最小二乘拟合

        self.max_iteration_number = DEFAULT_MAX_ITERATIONS   # 全局最大迭代次数
        self.confidence = DEFAULT_CONFIDENCE             # 结果的置信率
        self.threshold = DEFAULT_THRESHOLD               # 决定内点和外点的阈值，LMedS 中为停止阈值
        self.progress_delta = DEFAULT_PROGRESS_DELTA     # 进度通知的最小变化量


class _Statistics:

    def __init__(self):
        self.iteration_number = 0
        self.best_inlier_number = 0
        self.model_update_number = 0


class InliersData:
    """ 最佳模型的内点掩码、残差和内点数目 """

    def __init__(self, inliers, residuals, inlier_number):
        self.inliers = inliers
        self.residuals = residuals
        self.inlier_number = inlier_number

    def getInliers(self):
        return self.inliers

    def getResiduals(self):
        return self.residuals

    def getNumInliers(self):
        return self.inlier_number


class RANSAC:

    def __init__(self):
        # 设置初始化
        self.settings = _Settings()
        self.statistics = _Statistics()

        self.estimator = None
        self.main_sampler = None
        self.scoring_function = None
        self.termination = None

        self.point_number = 0
        self.sample_number = 0

    def run(self,
            evaluations,
            estimator,
            main_sampler,
            scoring_function,
            termination,
            listener=None,
            caller=None):
        """ 运行一致性采样求解过程

        参数
        ----------
        evaluations : list(PolynomialEvaluation)
            输入的观测值集合
        estimator : Estimator
            模型的估计器
        main_sampler : Sampler
            全局采样器
        scoring_function : RansacScoringFunction
            模型评估的评分函数
        termination : Termination
            迭代终止条件
        listener : PolynomialRobustEstimatorListener 可选
            估计过程监听器
        caller : object 可选
            传给监听器的估计器对象

        返回
        ----------
        Model, InliersData
            求解的最佳模型和对应的内点数据
        """
        # 初始化参数赋值
        self.statistics = _Statistics()
        self.point_number = len(evaluations)
        self.sample_number = estimator.sampleSize()

        self.estimator = estimator
        self.main_sampler = main_sampler
        self.scoring_function = scoring_function
        self.termination = termination
        self.estimator.initialize(evaluations)

        if listener is not None:
            listener.onEstimateStart(caller)

        ''' The main RANSAC iteration '''

        # 记录全局的最佳模型，得分
        so_far_the_best_model = None
        so_far_the_best_score = self.scoring_function.initialScore()

        # 初始化采样池
        pool = [i for i in range(self.point_number)]

        previous_progress = 0.0
        improved = False
        while self.termination.shouldContinue(self.statistics, improved):
            progress = self.__getProgress()
            if listener is not None and progress - previous_progress > self.settings.progress_delta:
                previous_progress = progress
                listener.onEstimateProgressChange(caller, progress)

            # 增加迭代计算次数
            self.statistics.iteration_number += 1
            improved = False

            # Sk ← Draw a minimal sample
            sample = self.main_sampler.sample(pool, self.sample_number)
            # 检查采样是否有效，无效则重新评估
            if len(sample) == 0 or\
                    not self.estimator.isValidSample(evaluations, sample):
                models = []
            else:
                # θk ← Estimate a model using Sk
                models = self.estimator.estimateModel(evaluations, sample)

            for model in models:
                # wk ← Compute the support of θk
                score = self.scoring_function.getScore(self.estimator.residuals(model),
                                                       self.settings.threshold,
                                                       self.sample_number)

                # if wk > w∗ then
                # 	θ∗, w∗ ← θk, wk
                is_best = so_far_the_best_score < score
                if is_best:
                    improved = True
                    so_far_the_best_model = model
                    so_far_the_best_score = score
                    self.statistics.best_inlier_number = score.inlier_number
                    self.statistics.model_update_number += 1
                    polyransac_logger.debug(
                        f"Iteration {self.statistics.iteration_number}: "
                        f"better model with {score.inlier_number} inliers (score {score.value:g})")
                self.termination.update(score, is_best)

            if listener is not None:
                listener.onEstimateNextIteration(caller, self.statistics.iteration_number)

        if so_far_the_best_model is None:
            raise RobustEstimatorError(
                f"no model found after {self.statistics.iteration_number} iterations")

        polyransac_logger.info(f"Number of iterations = {self.statistics.iteration_number}")

        if self.settings.do_final_least_squares:
            so_far_the_best_model = self.__refit(evaluations, so_far_the_best_model, so_far_the_best_score)

        inliers_data = InliersData(so_far_the_best_score.inliers,
                                   self.estimator.residuals(so_far_the_best_model),
                                   so_far_the_best_score.inlier_number)

        if listener is not None:
            listener.onEstimateEnd(caller)

        # Output: θ - model parameters; L – inliers
        return so_far_the_best_model, inliers_data

    def __refit(self, evaluations, model, score):
        """ 在最佳内点集合上重新拟合模型 """
        inliers = np.flatnonzero(score.inliers)
        if len(inliers) < self.estimator.nonMinimalSampleSize():
            polyransac_logger.warning(
                f"Only {len(inliers)} inliers, keeping the minimal sample model")
            return model

        weights = self.scoring_function.getWeights(score)
        try:
            models = self.estimator.estimateModelNonminimal(evaluations,
                                                            inliers,
                                                            len(inliers),
                                                            weights=weights)
        except PolynomialEstimationError as e:
            raise RobustEstimatorError("final least squares fit on inliers failed") from e
        return models[0]

    def __getProgress(self):
        expected_iterations = self.termination.expectedIterations()
        if expected_iterations <= 0:
            return 1.0
        return min(self.statistics.iteration_number / expected_iterations, 1.0)
