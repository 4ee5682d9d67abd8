"""RPN表达式求值器 - 调用统一的Operators类"""
import math
from typing import List, Mapping, Optional

from core.errors import (
    DivisionByZeroError, DomainError, EvalError, MalformedExpressionError,
    StackUnderflowError, UndefinedVariableError, UnknownIdentifierError
)
from core.operators import OPERATOR_SYMBOLS
from core.registry import FunctionRegistry, FunctionSpec
from core.token_system import Token, TokenType


def _is_nan(value):
    return isinstance(value, float) and math.isnan(value)


class RPNEvaluator:
    """评估后缀表达式的值"""

    @staticmethod
    def evaluate(postfix: List[Token], variables: Optional[Mapping[str, float]] = None,
                 functions: Optional[FunctionRegistry] = None) -> float:
        """
        Args:
            postfix: 后缀Token序列
            variables: 变量绑定（只读）
            functions: 函数注册表（只读）
        Returns:
            float 结果
        Raises:
            EvalError 的各个子类，不返回部分结果
        """
        variables = variables if variables is not None else {}
        functions = functions if functions is not None else FunctionRegistry()
        stack = []

        for token in postfix:
            if token.type == TokenType.NUMBER:
                stack.append(token.value)

            elif token.type == TokenType.IDENTIFIER:
                if token.call:
                    spec = functions.get(token.name)
                    if spec is None:
                        raise UnknownIdentifierError(token.name, f"Unknown function: {token.name}")
                    argc = token.argc if token.argc is not None else RPNEvaluator._implicit_argc(spec)
                    RPNEvaluator._apply_function(spec, argc, stack)
                elif token.name in variables:
                    stack.append(RPNEvaluator._variable_value(token.name, variables[token.name]))
                elif token.name in functions:
                    spec = functions.get(token.name)
                    RPNEvaluator._apply_function(spec, spec.arity, stack)
                else:
                    raise UndefinedVariableError(token.name)

            elif token.type == TokenType.OPERATOR:
                if len(stack) < 2:
                    raise StackUnderflowError(token.name, 2, len(stack))
                b = stack.pop()
                a = stack.pop()
                result = OPERATOR_SYMBOLS[token.name](a, b)
                RPNEvaluator._check_domain(token.name, (a, b), result)
                stack.append(result)

            else:
                # 括号和逗号不应出现在后缀序列中
                raise MalformedExpressionError(f"Unexpected token in postfix sequence: {token.name!r}")

        if len(stack) != 1:
            if not stack:
                raise MalformedExpressionError("Empty expression")
            raise MalformedExpressionError(f"Stack has {len(stack)} elements after evaluation, expected 1")
        return float(stack[0])

    @staticmethod
    def _apply_function(spec: FunctionSpec, argc: int, stack: list):
        if not spec.accepts(argc):
            if spec.min_arity == spec.arity:
                expected = f"{spec.arity}"
            else:
                expected = f"{spec.min_arity} to {spec.arity}"
            raise MalformedExpressionError(f"{spec.name} expects {expected} arguments, got {argc}")
        if len(stack) < argc:
            raise StackUnderflowError(spec.name, argc, len(stack))

        # 出栈后恢复从左到右的参数顺序
        args = [stack.pop() for _ in range(argc)][::-1]
        args = spec.complete_args(args)
        try:
            result = spec.apply(*args)
        except EvalError:
            raise
        except ZeroDivisionError as e:
            raise DivisionByZeroError(f"Division by zero in {spec.name}") from e
        except (ValueError, ArithmeticError) as e:
            raise DomainError(spec.name, f"{spec.name}: {e}") from e
        except TypeError as e:
            # 实现的参数签名与注册的 arity 不一致
            raise MalformedExpressionError(f"Cannot call {spec.name} with {len(args)} arguments: {e}") from e

        try:
            result = float(result)
        except (TypeError, ValueError) as e:
            raise DomainError(spec.name, f"{spec.name} returned a non-numeric value: {result!r}") from e
        RPNEvaluator._check_domain(spec.name, args, result)
        stack.append(result)

    @staticmethod
    def _implicit_argc(spec: FunctionSpec) -> int:
        """
        没有逗号的调用：单参数合法时按1个参数处理（可选参数取默认值），
        否则按注册的 arity 出栈（兼容空格分隔的参数写法）
        """
        return 1 if spec.accepts(1) else spec.arity

    @staticmethod
    def _variable_value(name, value) -> float:
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise DomainError(name, f"Variable {name} is not a number: {value!r}") from e

    @staticmethod
    def _check_domain(symbol, args, result):
        """非NaN输入得到NaN结果视为定义域错误"""
        if _is_nan(result) and not any(_is_nan(a) for a in args):
            raise DomainError(symbol)
