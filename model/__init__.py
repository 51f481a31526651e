from .models import Model, Polynomial
from .evaluations import (PolynomialEvaluationType, PolynomialEvaluation,
                          DirectPolynomialEvaluation,
                          DerivativePolynomialEvaluation,
                          IntegralPolynomialEvaluation,
                          IntegralIntervalPolynomialEvaluation)
