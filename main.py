import logging
from time import time

import matplotlib as mpl
import numpy as np

from ransac import RobustEstimatorMethod, fitPolynomial
from utils_helper import (generateEvaluations, generatePolynomial,
                          getCoefficientError, showFits)


degree = 2
evaluation_number = 500
seed = 7


def testMethods(evaluations, quality_scores, expected):
    results = {}
    for method in RobustEstimatorMethod:
        print(method.value)
        t = time()
        polynomial, mask = fitPolynomial(evaluations,
                                         degree=degree,
                                         method=method,
                                         quality_scores=quality_scores,
                                         seed=seed)
        print('Inlier number = ', mask.sum() / len(evaluations))
        print('Elapsed time = ', time() - t)
        print('Error = ', getCoefficientError(polynomial, expected), '\n')
        results[method.value] = (polynomial, mask)
    return results


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s")

    rng = np.random.default_rng(seed)
    expected = generatePolynomial(degree, rng)
    evaluations, outliers, quality_scores = generateEvaluations(expected,
                                                                evaluation_number,
                                                                rng,
                                                                derivative_ratio=0.2)
    print('Polynomial = ', expected)
    print('Outlier ratio = ', outliers.mean(), '\n')

    results = testMethods(evaluations, quality_scores, expected)

    # 绘制五种方法的拟合结果对比图
    mpl.rcParams.update({'font.size': 8})
    showFits(results, evaluations, expected)
