"""core/operators.py"""
import numpy as np

from core.errors import DivisionByZeroError

# 运算符优先级；相同优先级按左结合处理（包括 ^）
PRECEDENCE = {
    '^': 4,
    '*': 3,
    '/': 3,
    '%': 3,
    '+': 2,
    '-': 2,
}


class Operators:
    """所有运算符和内置函数的静态方法集合"""

    # 二元运算符========================================
    @staticmethod
    def add(a, b):
        return a + b

    @staticmethod
    def sub(a, b):
        return a - b

    @staticmethod
    def mul(a, b):
        return a * b

    @staticmethod
    def div(a, b):
        """除零直接报错，不返回inf/NaN"""
        if b == 0:
            raise DivisionByZeroError()
        return a / b

    @staticmethod
    def mod(a, b):
        """Python浮点取余（结果符号与除数相同）"""
        if b == 0:
            raise DivisionByZeroError("Modulo by zero")
        return a % b

    @staticmethod
    def pow(a, b):
        """实数幂；负底数配小数指数得到NaN，由求值器转换为DomainError"""
        with np.errstate(all='ignore'):
            return float(np.power(np.float64(a), np.float64(b)))

    # 一元函数====================
    @staticmethod
    def _ufunc(func, x):
        with np.errstate(all='ignore'):
            return float(func(np.float64(x)))

    @staticmethod
    def sqrt(x):
        return Operators._ufunc(np.sqrt, x)

    @staticmethod
    def abs(x):
        return Operators._ufunc(np.abs, x)

    @staticmethod
    def round(x):
        """四舍五入（.5向上取整），与 np.round 的银行家舍入不同"""
        return Operators._ufunc(np.floor, x + 0.5)

    @staticmethod
    def floor(x):
        return Operators._ufunc(np.floor, x)

    @staticmethod
    def ceil(x):
        return Operators._ufunc(np.ceil, x)

    @staticmethod
    def sin(x):
        return Operators._ufunc(np.sin, x)

    @staticmethod
    def cos(x):
        return Operators._ufunc(np.cos, x)

    @staticmethod
    def tan(x):
        return Operators._ufunc(np.tan, x)

    @staticmethod
    def log(x):
        """自然对数；log(0) = -inf，负数由求值器报DomainError"""
        return Operators._ufunc(np.log, x)

    @staticmethod
    def exp(x):
        return Operators._ufunc(np.exp, x)

    # 金融函数========================================
    @staticmethod
    def pmt(rate, nper, pv):
        """
        每期还款额
        Args:
            rate: 每期利率
            nper: 期数
            pv: 现值
        """
        if rate == 0:
            if nper == 0:
                raise DivisionByZeroError("pmt with zero rate needs nper != 0")
            return -pv / nper
        growth = Operators.pow(1 + rate, -nper)
        if growth == 1:
            raise DivisionByZeroError("pmt denominator is zero")
        return (rate * pv) / (1 - growth)

    @staticmethod
    def fv(rate, nper, pmt, pv=0.0):
        """终值；pv 可省略，默认为0"""
        if rate == 0:
            return -(pv + pmt * nper)
        growth = Operators.pow(1 + rate, nper)
        return -(pv * growth + pmt * (growth - 1) / rate)


# 运算符号 -> 实现
OPERATOR_SYMBOLS = {
    '+': Operators.add,
    '-': Operators.sub,
    '*': Operators.mul,
    '/': Operators.div,
    '^': Operators.pow,
    '%': Operators.mod,
}
