"""核心模块 - Token系统、中缀转后缀、RPN评估器和操作符"""
from .errors import (
    EvalError, MalformedTokenError, UnbalancedParensError, UnknownIdentifierError,
    UndefinedVariableError, StackUnderflowError, DivisionByZeroError, DomainError,
    MalformedExpressionError
)
from .token_system import TokenType, Token, tokenize, tokens_to_string
from .operators import Operators, PRECEDENCE, OPERATOR_SYMBOLS
from .registry import FunctionSpec, FunctionRegistry, DEFAULT_FUNCTIONS, build_default_registry
from .converter import to_postfix
from .rpn_evaluator import RPNEvaluator

__all__ = [
    'EvalError', 'MalformedTokenError', 'UnbalancedParensError', 'UnknownIdentifierError',
    'UndefinedVariableError', 'StackUnderflowError', 'DivisionByZeroError', 'DomainError',
    'MalformedExpressionError',
    'TokenType', 'Token', 'tokenize', 'tokens_to_string',
    'Operators', 'PRECEDENCE', 'OPERATOR_SYMBOLS',
    'FunctionSpec', 'FunctionRegistry', 'DEFAULT_FUNCTIONS', 'build_default_registry',
    'to_postfix', 'RPNEvaluator'
]
