from .exceptions import (LockedError, NotReadyError, PolynomialEstimationError,
                         PolyRansacError, RobustEstimatorError)
from .logger import polyransac_logger
from .uniform_random_generator import UniformRandomGenerator
