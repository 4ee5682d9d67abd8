"""utils/formatting.py"""
import numpy as np


def format_result(value, precision=6):
    """按固定小数位取整后去掉末尾的0：16.0 -> '16'，0.1+0.2 -> '0.3'"""
    value = float(value)
    if not np.isfinite(value):
        return str(value)
    rounded = np.round(value, precision)
    if rounded == 0:
        rounded = 0.0  # 避免 '-0'
    return np.format_float_positional(rounded, precision=precision, unique=True, trim='-')
