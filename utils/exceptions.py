""" 多项式鲁棒估计的异常类型

参数非法时直接抛出内置的 ValueError。
"""


class PolyRansacError(Exception):
    """ 所有估计异常的基类 """

    pass


class LockedError(PolyRansacError):
    """ 估计器正在执行 estimate()，被锁定时调用修改方法或再次估计 """

    def __init__(self, message="estimator is locked while an estimation is in progress"):
        super().__init__(message)


class NotReadyError(PolyRansacError):
    """ 估计器配置不完整，尚不能开始估计 """

    def __init__(self, message="estimator is not ready"):
        super().__init__(message)


class PolynomialEstimationError(PolyRansacError):
    """ 线性系统无法求解（秩亏或结果非有限值） """

    pass


class RobustEstimatorError(PolyRansacError):
    """ 鲁棒估计没有找到满足一致性要求的模型，或最终拟合失败 """

    pass
