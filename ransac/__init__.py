from .ransac import RANSAC, InliersData
from .robust_estimator import (PolynomialRobustEstimator,
                               PolynomialRobustEstimatorListener,
                               RobustEstimatorMethod)
from .polynomial_robust_estimators import (LMedSPolynomialRobustEstimator,
                                           MSACPolynomialRobustEstimator,
                                           PROMedSPolynomialRobustEstimator,
                                           PROSACPolynomialRobustEstimator,
                                           RANSACPolynomialRobustEstimator)
from .ransac_api import create, fitPolynomial
