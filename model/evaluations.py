from enum import Enum


class PolynomialEvaluationType(Enum):
    """ 多项式观测值的类型 """
    DIRECT_EVALUATION = "direct"
    DERIVATIVE_EVALUATION = "derivative"
    INTEGRAL_EVALUATION = "integral"
    INTEGRAL_INTERVAL = "integral_interval"


class PolynomialEvaluation:
    """ 多项式观测值基类，保存观测到的数值 """

    def __init__(self, evaluation=0.0):
        self.evaluation = evaluation

    def getEvaluation(self):
        return self.evaluation

    def setEvaluation(self, evaluation):
        self.evaluation = evaluation

    def getX(self):
        """ 观测值对应的横坐标 """
        pass

    def getType(self):
        pass


class DirectPolynomialEvaluation(PolynomialEvaluation):
    """ 直接观测 p(x) """

    def __init__(self, x=0.0, evaluation=0.0):
        super().__init__(evaluation)
        self.x = x

    def getX(self):
        return self.x

    def setX(self, x):
        self.x = x

    def getType(self):
        return PolynomialEvaluationType.DIRECT_EVALUATION


class DerivativePolynomialEvaluation(PolynomialEvaluation):
    """ 观测 k 阶导数 p^(k)(x) """

    MIN_DERIVATIVE_ORDER = 1

    def __init__(self, x=0.0, evaluation=0.0, derivative_order=MIN_DERIVATIVE_ORDER):
        super().__init__(evaluation)
        self.x = x
        self.derivative_order = self.MIN_DERIVATIVE_ORDER
        self.setDerivativeOrder(derivative_order)

    def getX(self):
        return self.x

    def setX(self, x):
        self.x = x

    def getDerivativeOrder(self):
        return self.derivative_order

    def setDerivativeOrder(self, derivative_order):
        if derivative_order < self.MIN_DERIVATIVE_ORDER:
            raise ValueError("derivative order must be at least 1")
        self.derivative_order = derivative_order

    def getType(self):
        return PolynomialEvaluationType.DERIVATIVE_EVALUATION


def _checkConstants(constants, integral_order):
    """ 积分常数要么为 None，要么长度等于积分阶数 """
    if integral_order < 1:
        raise ValueError("integral order must be at least 1")
    if constants is not None and len(constants) != integral_order:
        raise ValueError("length of constants must be equal to integral order")


class IntegralPolynomialEvaluation(PolynomialEvaluation):
    """ 观测 p 的 k 阶不定积分在 x 处的取值

    constants[i] 是第 i 个积分常数，对应积分多项式中 x^i / i! 项的系数，
    为 None 时所有常数视为 0。
    """

    MIN_INTEGRAL_ORDER = 1

    def __init__(self, x=0.0, evaluation=0.0, constants=None, integral_order=MIN_INTEGRAL_ORDER):
        super().__init__(evaluation)
        _checkConstants(constants, integral_order)
        self.x = x
        self.constants = constants
        self.integral_order = integral_order

    def getX(self):
        return self.x

    def setX(self, x):
        self.x = x

    def getConstants(self):
        return self.constants

    def setConstants(self, constants):
        _checkConstants(constants, self.integral_order)
        self.constants = constants

    def getIntegralOrder(self):
        return self.integral_order

    def setIntegralOrder(self, integral_order):
        _checkConstants(self.constants, integral_order)
        self.integral_order = integral_order

    def setIntegralOrderAndConstants(self, integral_order, constants):
        _checkConstants(constants, integral_order)
        self.integral_order = integral_order
        self.constants = constants

    def getType(self):
        return PolynomialEvaluationType.INTEGRAL_EVALUATION


class IntegralIntervalPolynomialEvaluation(PolynomialEvaluation):
    """ 观测 p 在 [start_x, end_x] 上的 k 阶定积分

    constants 只为接口对称而保留，在定积分中不起作用。
    """

    MIN_INTEGRAL_ORDER = 1

    def __init__(self, start_x=0.0, end_x=0.0, evaluation=0.0, constants=None,
                 integral_order=MIN_INTEGRAL_ORDER):
        super().__init__(evaluation)
        _checkConstants(constants, integral_order)
        self.start_x = start_x
        self.end_x = end_x
        self.constants = constants
        self.integral_order = integral_order

    def getX(self):
        """ 积分区间的中点 """
        return 0.5 * (self.start_x + self.end_x)

    def getStartX(self):
        return self.start_x

    def setStartX(self, start_x):
        self.start_x = start_x

    def getEndX(self):
        return self.end_x

    def setEndX(self, end_x):
        self.end_x = end_x

    def setInterval(self, start_x, end_x):
        self.start_x = start_x
        self.end_x = end_x

    def getConstants(self):
        return self.constants

    def setConstants(self, constants):
        _checkConstants(constants, self.integral_order)
        self.constants = constants

    def getIntegralOrder(self):
        return self.integral_order

    def setIntegralOrder(self, integral_order):
        _checkConstants(self.constants, integral_order)
        self.integral_order = integral_order

    def setIntegralOrderAndConstants(self, integral_order, constants):
        _checkConstants(constants, integral_order)
        self.integral_order = integral_order
        self.constants = constants

    def getType(self):
        return PolynomialEvaluationType.INTEGRAL_INTERVAL
