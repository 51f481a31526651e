from .solver_engine import SolverEngine
from .solver_polynomial_linear import (SolverPolynomialLinear, buildLinearSystem,
                                       evaluationToRow, normalizeRow,
                                       selectWeights, solveLinearSystem)
