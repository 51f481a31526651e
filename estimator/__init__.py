from .estimator import Estimator
from .estimator_polynomial import EstimatorPolynomial
from .polynomial_estimator import (LMSEPolynomialEstimator, PolynomialEstimator,
                                   PolynomialEstimatorListener,
                                   PolynomialEstimatorType,
                                   WeightedPolynomialEstimator, create)
