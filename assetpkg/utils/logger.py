"""assetpkg 日志配置

CLI 与 Web 入口在启动时调用 setup_logging()；库代码只使用
logging.getLogger(__name__)，从不自行配置 handler。
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone

LEVEL_ENV = "ASSETPKG_LOG_LEVEL"
JSON_ENV = "ASSETPKG_LOG_JSON"


class JSONFormatter(logging.Formatter):
    """结构化 JSON 日志格式器，便于 CI 流水线消费

    输出格式:
        {"timestamp": ..., "level": "INFO", "logger": "assetpkg.core.installer",
         "message": ..., "package": "Foo~1.0" (仅当 extra 提供时),
         "exception": "traceback..." (仅在有异常时)}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        package = getattr(record, "package", None)
        if package:
            log_entry["package"] = package
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """配置根日志器（输出到 stderr，重复调用不会叠加 handler）

    参数:
        level: 日志级别字符串（DEBUG, INFO, WARNING, ERROR）
        json_output: 为 True 时使用 JSON 格式，否则使用人类可读格式
    """
    root = logging.getLogger()
    reset_logging()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        fmt = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
        handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)


def setup_logging_from_env(default_level: str = "INFO", default_json: bool = False) -> None:
    """环境变量 ASSETPKG_LOG_LEVEL / ASSETPKG_LOG_JSON 优先，其次取参数（通常来自 Config）"""
    level = os.getenv(LEVEL_ENV) or default_level
    json_env = os.getenv(JSON_ENV)
    json_output = json_env == "1" if json_env is not None else default_json
    setup_logging(level=level, json_output=json_output)


def reset_logging() -> None:
    """清理根日志器上已注册的 handlers（测试中重新配置时使用）"""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
