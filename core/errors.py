"""core/errors.py - 求值错误类型"""


class EvalError(Exception):
    """所有公式求值错误的基类"""


class MalformedTokenError(EvalError):
    def __init__(self, fragment):
        self.fragment = fragment
        super().__init__(f"Malformed token: {fragment!r}")


class UnbalancedParensError(EvalError):
    def __init__(self, message="Unbalanced parentheses"):
        super().__init__(message)


class UnknownIdentifierError(EvalError):
    def __init__(self, name, message=None):
        self.name = name
        super().__init__(message or f"Unknown identifier: {name}")


class UndefinedVariableError(UnknownIdentifierError):
    """变量未在绑定中给出（也不是已注册函数）"""

    def __init__(self, name):
        super().__init__(name, f"Undefined variable: {name}")


class StackUnderflowError(EvalError):
    def __init__(self, symbol, needed, available):
        self.symbol = symbol
        self.needed = needed
        self.available = available
        super().__init__(
            f"Insufficient operands for {symbol}: needs {needed}, stack has {available}"
        )


class DivisionByZeroError(EvalError):
    def __init__(self, message="Division by zero"):
        super().__init__(message)


class DomainError(EvalError):
    def __init__(self, symbol, message=None):
        self.symbol = symbol
        super().__init__(message or f"Result of {symbol} is not a real number")


class MalformedExpressionError(EvalError):
    def __init__(self, message="Malformed expression"):
        super().__init__(message)
