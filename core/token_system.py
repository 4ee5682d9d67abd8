"""core/token_system.py"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from core.errors import MalformedTokenError


class TokenType(Enum):
    NUMBER = "number"          # 数值字面量
    IDENTIFIER = "identifier"  # 变量或函数名，由注册表在求值时区分
    OPERATOR = "operator"      # + - * / ^ %
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"
    COMMA = "comma"            # 函数参数分隔符


@dataclass(frozen=True)
class Token:
    type: TokenType
    name: str
    value: Optional[float] = None
    argc: Optional[int] = None  # 仅后缀序列中的函数调用使用
    call: bool = False          # 以 name(...) 形式书写的标识符


OPERATOR_CHARS = '+-*/^%'

# 单字符Token定义
SINGLE_CHAR_TOKENS = {
    **{ch: Token(TokenType.OPERATOR, ch) for ch in OPERATOR_CHARS},
    '(': Token(TokenType.LEFT_PAREN, '('),
    ')': Token(TokenType.RIGHT_PAREN, ')'),
    ',': Token(TokenType.COMMA, ','),
}

_NUMBER_RE = re.compile(r'^(\d+\.?\d*|\.\d+)([eE]\d+)?$')
# 标识符：字母或下划线开头，其后为单词字符或 "."；".x"、"$rate" 之类的片段不是标识符
_IDENTIFIER_RE = re.compile(r'^[^\W\d][\w.]*$')


def classify_fragment(fragment: str) -> Token:
    """把缓冲区中的片段归类为数值或标识符"""
    if _NUMBER_RE.match(fragment):
        return Token(TokenType.NUMBER, fragment, value=float(fragment))
    if _IDENTIFIER_RE.match(fragment):
        return Token(TokenType.IDENTIFIER, fragment)
    raise MalformedTokenError(fragment)


def tokenize(formula: str) -> List[Token]:
    """
    逐字符扫描公式，生成Token序列
    Args:
        formula: 中缀公式字符串
    Returns:
        Token列表（空白输入返回空列表）
    """
    tokens = []
    buffer = ''

    for char in formula or '':
        if char.isspace():
            if buffer:
                tokens.append(classify_fragment(buffer))
            buffer = ''
            continue

        if char in SINGLE_CHAR_TOKENS:
            if buffer:
                tokens.append(classify_fragment(buffer))
            tokens.append(SINGLE_CHAR_TOKENS[char])
            buffer = ''
            continue

        buffer += char

    if buffer:
        tokens.append(classify_fragment(buffer))

    return tokens


def tokens_to_string(tokens) -> str:
    """Token序列还原为以空格分隔的字符串"""
    return ' '.join(t.name for t in tokens)
