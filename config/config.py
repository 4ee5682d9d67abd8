"""配置文件"""
import logging

# 求值器参数
EVALUATOR_CONFIG = {
    "strict_identifiers": False,  # True 时在转换阶段拒绝未知标识符
    "display_precision": 6,       # 结果显示保留的小数位
    "frame_errors": "coerce",     # evaluate_frame 默认错误处理：coerce 或 raise
}

# 日志配置
LOGGING_CONFIG = {
    "level": "INFO",
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}


# 验证配置
def validate_config():
    """验证配置的合理性"""
    assert isinstance(EVALUATOR_CONFIG["strict_identifiers"], bool), "strict_identifiers 必须是布尔值"
    assert EVALUATOR_CONFIG["display_precision"] >= 0, "display_precision 不能为负"
    assert EVALUATOR_CONFIG["frame_errors"] in ("coerce", "raise"), "frame_errors 只能是 coerce 或 raise"
    assert isinstance(logging.getLevelName(LOGGING_CONFIG["level"]), int), "未知的日志级别"
    logging.getLogger(__name__).debug("Configuration validated successfully!")


def configure_logging(level=None):
    """按 LOGGING_CONFIG 设置根日志"""
    logging.basicConfig(
        level=level or LOGGING_CONFIG["level"],
        format=LOGGING_CONFIG["format"]
    )
