"""
日志配置 - Python logging 最佳实践
"""
import logging
import sys
import time
from contextlib import contextmanager
from typing import Iterator

# 标记本模块安装的 handler，重复调用 setup_logging 时据此替换
_HANDLER_NAME = "painting_agent.console"


def setup_logging(log_level: str = "INFO") -> None:
    """
    配置日志系统

    类似于 Java 的 logback.xml 配置；可重复调用（uvicorn reload 会重新导入入口模块）
    """
    # 日志格式
    fmt = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    # 控制台处理器
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.set_name(_HANDLER_NAME)

    # 根日志记录器
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.addHandler(console_handler)

    # 设置第三方库日志级别（图片下载走 requests/urllib3）
    for name in ("httpx", "httpcore", "openai", "urllib3"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    获取日志记录器

    用法:
        logger = get_logger(__name__)
        logger.info("信息日志")
    """
    return logging.getLogger(name)


@contextmanager
def log_elapsed(logger: logging.Logger, message: str) -> Iterator[None]:
    """
    记录一段上游调用的耗时，类似 Spring 的 StopWatch

    用法:
        with log_elapsed(logger, "图片下载完成"):
            response = requests.get(url)
    只在正常结束时输出 "<message> (123ms)"，异常直接向上抛出
    """
    started = time.perf_counter()
    yield
    logger.info(f"{message} ({(time.perf_counter() - started) * 1000:.0f}ms)")
