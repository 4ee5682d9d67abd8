"""公式模块 - 求值入口和默认求值器"""
from .evaluator import FormulaEvaluator, EvalResult

# 进程级默认求值器；register_function 需在并发求值前完成
default_evaluator = FormulaEvaluator()


def register_function(name, arity, body, defaults=()):
    return default_evaluator.register_function(name, arity, body, defaults)


def evaluate(formula, variables=None):
    return default_evaluator.evaluate(formula, variables)


def try_evaluate(formula, variables=None):
    return default_evaluator.try_evaluate(formula, variables)


__all__ = [
    'FormulaEvaluator', 'EvalResult', 'default_evaluator',
    'register_function', 'evaluate', 'try_evaluate'
]
