"""中缀 -> 后缀（shunting-yard）转换器"""
import dataclasses
import logging
from typing import List, Mapping, Optional

from core.errors import MalformedExpressionError, UnbalancedParensError, UnknownIdentifierError
from core.operators import PRECEDENCE
from core.token_system import Token, TokenType

logger = logging.getLogger(__name__)


class _CallFrame:
    """一对括号内的参数计数"""

    def __init__(self, function: Optional[Token]):
        self.function = function
        self.commas = 0
        self.has_content = False
        self.slot_filled = False  # 上一个逗号之后是否出现过参数

    def mark_content(self):
        self.has_content = True
        self.slot_filled = True

    def close_slot(self, separator=False):
        """逗号或右括号结束当前参数位；空参数位（如 f(1,,2)、f(1,)）视为错误"""
        if (separator or self.commas) and not self.slot_filled:
            raise MalformedExpressionError(f"Empty argument in call to {self.function.name}")

    def argc(self):
        if not self.has_content:
            return 0
        # 没有逗号时由求值器根据注册表决定参数个数
        return self.commas + 1 if self.commas else None


def _check_identifier(token, functions, variables):
    known = (functions is not None and token.name in functions) or \
            (variables is not None and token.name in variables)
    if not known:
        raise UnknownIdentifierError(token.name)


def to_postfix(tokens: List[Token], functions=None, variables: Optional[Mapping[str, float]] = None,
               strict: bool = False) -> List[Token]:
    """
    把中缀Token序列转换为后缀序列
    Args:
        tokens: tokenize 的输出
        functions: 函数注册表，仅 strict 模式下使用
        variables: 变量绑定，仅 strict 模式下使用
        strict: 是否在转换阶段拒绝未知标识符
    Returns:
        后缀Token列表；函数调用以 call=True 的 IDENTIFIER 出现在其参数之后
    """
    output = []
    stack = []    # 运算符栈：OPERATOR / LEFT_PAREN / 函数调用标记
    frames = []   # 与栈中每个 LEFT_PAREN 对应

    for i, token in enumerate(tokens):
        if frames and token.type in (TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.LEFT_PAREN):
            frames[-1].mark_content()

        if token.type == TokenType.NUMBER:
            output.append(token)

        elif token.type == TokenType.IDENTIFIER:
            is_call = i + 1 < len(tokens) and tokens[i + 1].type == TokenType.LEFT_PAREN
            if strict:
                _check_identifier(token, functions, variables if not is_call else None)
            if is_call:
                stack.append(dataclasses.replace(token, call=True))
            else:
                output.append(token)

        elif token.type == TokenType.LEFT_PAREN:
            function = stack[-1] if stack and stack[-1].call else None
            frames.append(_CallFrame(function))
            stack.append(token)

        elif token.type == TokenType.RIGHT_PAREN:
            while stack and stack[-1].type != TokenType.LEFT_PAREN:
                output.append(stack.pop())
            if not stack:
                raise UnbalancedParensError("Unmatched ')'")
            stack.pop()
            frame = frames.pop()
            if frame.function is not None:
                frame.close_slot()
                stack.pop()
                output.append(dataclasses.replace(frame.function, argc=frame.argc()))

        elif token.type == TokenType.COMMA:
            if not frames or frames[-1].function is None:
                raise MalformedExpressionError("Argument separator outside of a function call")
            frame = frames[-1]
            frame.close_slot(separator=True)
            while stack[-1].type != TokenType.LEFT_PAREN:
                output.append(stack.pop())
            frame.commas += 1
            frame.slot_filled = False

        elif token.type == TokenType.OPERATOR:
            # >= 使同级运算符左结合，^ 也不例外
            while stack and stack[-1].type == TokenType.OPERATOR and \
                    PRECEDENCE[stack[-1].name] >= PRECEDENCE[token.name]:
                output.append(stack.pop())
            stack.append(token)

    while stack:
        token = stack.pop()
        if token.type == TokenType.LEFT_PAREN:
            raise UnbalancedParensError("Unmatched '('")
        output.append(token)

    logger.debug(f"Postfix: {' '.join(t.name for t in output)}")
    return output
