import math

import numpy as np
from numpy.polynomial import polynomial as P


class Model:
    """ RANSAC算法求解模型基类 """

    def __init__(self):
        self.descriptor = None


class Polynomial(Model):
    """ 一元多项式模型，descriptor 为由低次到高次排列的系数向量 """

    MIN_VALID_POLY_PARAMS_LENGTH = 1

    def __init__(self, *poly_params):
        super().__init__()
        if len(poly_params) == 0:
            poly_params = (0.0,)
        elif len(poly_params) == 1 and np.ndim(poly_params[0]) == 1:
            # 也接受直接传入系数数组
            poly_params = poly_params[0]
        self.setPolyParams(poly_params)

    def getPolyParams(self):
        return self.descriptor

    def setPolyParams(self, poly_params):
        poly_params = np.array(poly_params, dtype=float).ravel()
        if len(poly_params) < self.MIN_VALID_POLY_PARAMS_LENGTH:
            raise ValueError("polynomial needs at least one parameter")
        self.descriptor = poly_params

    def getDegree(self):
        """ 多项式次数，忽略最高次的零系数 """
        nonzero = np.flatnonzero(self.descriptor)
        if len(nonzero) == 0:
            return 0
        return int(nonzero[-1])

    def add(self, other):
        return Polynomial(P.polyadd(self.descriptor, other.descriptor))

    def subtract(self, other):
        return Polynomial(P.polysub(self.descriptor, other.descriptor))

    def multiply(self, other):
        return Polynomial(P.polymul(self.descriptor, other.descriptor))

    def multiplyByScalar(self, scalar):
        return Polynomial(self.descriptor * scalar)

    def evaluate(self, x):
        """ 计算 p(x)，x 可以是标量或 numpy 数组 """
        return P.polyval(x, self.descriptor)

    def derivative(self):
        return self.nthDerivative(1)

    def evaluateDerivative(self, x):
        return self.evaluateNthDerivative(x, 1)

    def nthDerivative(self, order):
        """ 求 order 阶导数多项式

        参数
        ----------
        order : int
            求导阶数，至少为 1

        返回
        ----------
        Polynomial
            求导后的多项式
        """
        if order < 1:
            raise ValueError("derivative order must be at least 1")
        if order >= len(self.descriptor):
            return Polynomial(0.0)
        return Polynomial(P.polyder(self.descriptor, order))

    def evaluateNthDerivative(self, x, order):
        return self.nthDerivative(order).evaluate(x)

    def integration(self, constant=0.0):
        return self.nthIntegration(1, [constant])

    def nthIntegration(self, order, constants=None):
        """ 求 order 阶不定积分多项式

        参数
        ----------
        order : int
            积分阶数，至少为 1
        constants : list 可选
            各阶积分常数，长度必须等于 order，缺省时全部为 0

        返回
        ----------
        Polynomial
            积分后的多项式，第 i 个常数对应 x^i / i! 项
        """
        if order < 1:
            raise ValueError("integral order must be at least 1")
        if constants is not None and len(constants) != order:
            raise ValueError("length of constants must be order")

        result = np.zeros(len(self.descriptor) + order)
        if constants is not None:
            for i in range(order):
                result[i] = constants[i] / math.factorial(i)
        result[order:] = P.polyint(self.descriptor, order)[order:]
        return Polynomial(result)

    def integrateInterval(self, start_x, end_x):
        return self.nthOrderIntegrateInterval(start_x, end_x, 1)

    def nthOrderIntegrateInterval(self, start_x, end_x, order):
        """ 在 [start_x, end_x] 上求 order 阶定积分，积分常数取 0 """
        integral = self.nthIntegration(order)
        return integral.evaluate(end_x) - integral.evaluate(start_x)

    def __repr__(self):
        return f"Polynomial({self.descriptor.tolist()})"
