import logging
from typing import Callable, Dict, Iterable, List, Mapping, NamedTuple, Optional, Union

import numpy as np
import pandas as pd

from config.config import EVALUATOR_CONFIG
from core import (
    EvalError, FunctionRegistry, RPNEvaluator, Token, build_default_registry,
    to_postfix, tokenize
)
from utils.formatting import format_result

logger = logging.getLogger(__name__)


class EvalResult(NamedTuple):
    """求值结果对：value 与 error 恰有一个不为 None"""
    value: Optional[float]
    error: Optional[EvalError]

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self):
        if self.error is not None:
            return str(self.error)
        return format_result(self.value, EVALUATOR_CONFIG["display_precision"])


class FormulaEvaluator:
    """
    公式求值入口：tokenize -> to_postfix -> RPNEvaluator.evaluate
    函数注册表在构造时预置默认函数；变量绑定每次调用时传入。
    """

    def __init__(self, functions: Optional[FunctionRegistry] = None, strict: Optional[bool] = None):
        self.functions = functions.copy() if functions is not None else build_default_registry()
        self.strict = EVALUATOR_CONFIG["strict_identifiers"] if strict is None else strict
        self.rpn_evaluator = RPNEvaluator

    def register_function(self, name: str, arity: int, body: Callable, defaults: Iterable[float] = ()):
        """添加或覆盖函数；不可与并发求值同时调用"""
        spec = self.functions.register(name, arity, body, defaults)
        logger.debug(f"Registered function {spec}")
        return spec

    def parse(self, formula: str, variables: Optional[Mapping[str, float]] = None) -> List[Token]:
        """
        解析为后缀序列。非 strict 模式下结果与变量绑定无关，可对不同绑定重复使用。
        """
        tokens = tokenize(formula)
        return to_postfix(tokens, self.functions, variables, strict=self.strict)

    def evaluate_postfix(self, postfix: List[Token], variables: Optional[Mapping[str, float]] = None) -> float:
        return self.rpn_evaluator.evaluate(postfix, variables or {}, self.functions)

    def evaluate(self, formula: str, variables: Optional[Mapping[str, float]] = None) -> float:
        """
        Args:
            formula: 中缀公式字符串
            variables: 变量名 -> 数值
        Returns:
            float 结果
        Raises:
            EvalError: 任一阶段失败
        """
        variables = variables or {}
        postfix = self.parse(formula, variables)
        return self.evaluate_postfix(postfix, variables)

    def try_evaluate(self, formula: str, variables: Optional[Mapping[str, float]] = None) -> EvalResult:
        """与 evaluate 相同，但以 EvalResult 返回错误而不是抛出"""
        try:
            return EvalResult(self.evaluate(formula, variables), None)
        except EvalError as e:
            logger.debug(f"Error evaluating formula '{formula[:50]}': {type(e).__name__}: {e}")
            return EvalResult(None, e)

    def evaluate_frame(self, formula: str, data: Union[pd.DataFrame, Dict],
                       errors: Optional[str] = None) -> pd.Series:
        """
        对表格的每一行求值，列名作为变量名
        Args:
            formula: 中缀公式字符串
            data: DataFrame 或 列名 -> 序列 的字典
            errors: 'coerce' 失败行填 NaN；'raise' 抛出第一个错误
        Returns:
            与 data 索引对齐的 float Series
        """
        errors = errors or EVALUATOR_CONFIG["frame_errors"]
        if errors not in ('coerce', 'raise'):
            raise ValueError(f"errors must be 'coerce' or 'raise', got {errors!r}")

        frame = data if isinstance(data, pd.DataFrame) else pd.DataFrame(data)
        values = np.full(len(frame), np.nan)

        # 解析失败对所有行都一样
        try:
            postfix = self.parse(formula, self._strict_bindings(frame))
        except EvalError as e:
            if errors == 'raise':
                raise
            logger.warning(f"Failed to parse formula '{formula[:50]}': {e}")
            return pd.Series(values, index=frame.index, name=formula)

        failures = {}
        for i, row in enumerate(frame.to_dict('records')):
            try:
                values[i] = self.evaluate_postfix(postfix, row)
            except EvalError as e:
                if errors == 'raise':
                    raise
                failures[type(e).__name__] = failures.get(type(e).__name__, 0) + 1

        if failures:
            logger.warning(f"Formula '{formula[:50]}' failed on {sum(failures.values())}/{len(frame)} rows: {failures}")
        return pd.Series(values, index=frame.index, name=formula)

    def _strict_bindings(self, frame: pd.DataFrame):
        # strict 模式下仅用列名判断变量是否存在
        return {col: 0.0 for col in frame.columns} if self.strict else None
