"""函数注册表 - 名称到 (arity, callable) 的映射"""
from typing import Callable, Dict, Iterable, Optional, Tuple

from core.operators import Operators


class FunctionSpec:
    """
    已注册函数的描述
    arity 是最大参数个数，在注册时显式给出，不从callable推断；
    defaults 为末尾可选参数的默认值。
    """

    def __init__(self, name: str, arity: int, apply: Callable, defaults: Iterable[float] = ()):
        defaults = tuple(float(d) for d in defaults)
        if arity < 0:
            raise ValueError(f"Arity of {name} must be non-negative, got {arity}")
        if len(defaults) > arity:
            raise ValueError(f"{name} has {len(defaults)} defaults but arity {arity}")
        self.name = name
        self.arity = arity
        self.apply = apply
        self.defaults = defaults

    @property
    def min_arity(self) -> int:
        return self.arity - len(self.defaults)

    def accepts(self, argc: int) -> bool:
        return self.min_arity <= argc <= self.arity

    def complete_args(self, args: list) -> list:
        """用默认值补齐省略的末尾参数"""
        missing = self.arity - len(args)
        if missing <= 0:
            return list(args)
        return list(args) + list(self.defaults[len(self.defaults) - missing:])

    def __repr__(self):
        return f"FunctionSpec({self.name!r}, arity={self.arity}, defaults={self.defaults})"


class FunctionRegistry:
    """
    函数注册表。注册应在并发求值开始前完成，之后只读。
    """

    def __init__(self, specs: Optional[Dict[str, FunctionSpec]] = None):
        self._functions: Dict[str, FunctionSpec] = dict(specs or {})

    def register(self, name: str, arity: int, body: Callable, defaults: Iterable[float] = ()) -> FunctionSpec:
        """添加或覆盖一个函数"""
        spec = FunctionSpec(name, arity, body, defaults)
        self._functions[name] = spec
        return spec

    def get(self, name: str) -> Optional[FunctionSpec]:
        return self._functions.get(name)

    def names(self) -> Tuple[str, ...]:
        return tuple(self._functions)

    def copy(self) -> 'FunctionRegistry':
        return FunctionRegistry(self._functions)

    def __contains__(self, name) -> bool:
        return name in self._functions

    def __len__(self) -> int:
        return len(self._functions)


# 默认函数定义：名称 -> (arity, 实现, 默认值)
DEFAULT_FUNCTIONS = {
    'sqrt': (1, Operators.sqrt, ()),
    'abs': (1, Operators.abs, ()),
    'round': (1, Operators.round, ()),
    'floor': (1, Operators.floor, ()),
    'ceil': (1, Operators.ceil, ()),
    'sin': (1, Operators.sin, ()),
    'cos': (1, Operators.cos, ()),
    'tan': (1, Operators.tan, ()),
    'log': (1, Operators.log, ()),
    'exp': (1, Operators.exp, ()),

    # 金融函数
    'pmt': (3, Operators.pmt, ()),
    'fv': (4, Operators.fv, (0.0,)),  # fv(rate, nper, pmt, pv=0)
}


def build_default_registry() -> FunctionRegistry:
    registry = FunctionRegistry()
    for name, (arity, body, defaults) in DEFAULT_FUNCTIONS.items():
        registry.register(name, arity, body, defaults)
    return registry
