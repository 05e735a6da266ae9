"""包管理 HTTP API（基于 Flask）

提供：已安装 / 可用包查询、安装项目依赖、更新单个包、清除包。

启动方式:
  gunicorn --config deploy/gunicorn.conf.py "assetpkg.web.app:create_app()"

追踪账本没有跨进程保护，写操作在进程内串行化，部署时只能开一个 worker。
"""

from __future__ import annotations

import logging
import threading

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from assetpkg.core.config import DEFAULT_CONFIG_FILE, Config
from assetpkg.core.exceptions import AssetPkgError
from assetpkg.services.container import ServiceContainer
from assetpkg.utils.logger import setup_logging_from_env
from assetpkg.web.responses import from_error

logger = logging.getLogger(__name__)

CONTAINER_KEY = "assetpkg.container"
LOCK_KEY = "assetpkg.lock"


def create_app(
    container: ServiceContainer | None = None,
    config_path: str = DEFAULT_CONFIG_FILE,
) -> Flask:
    """构造 Flask 应用；未传入容器时从 config_path 加载配置"""
    if container is None:
        cfg = Config.from_file(config_path)
        setup_logging_from_env(default_level=cfg.log_level, default_json=cfg.log_json)
        container = ServiceContainer(cfg)

    app = Flask(__name__)
    app.extensions[CONTAINER_KEY] = container
    app.extensions[LOCK_KEY] = threading.Lock()

    @app.errorhandler(AssetPkgError)
    def handle_business_error(exc: AssetPkgError):
        logger.warning("请求失败 [%s]: %s", exc.code, exc)
        return from_error(exc)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        """将所有 HTTP 异常统一返回 JSON"""
        return jsonify(error=exc.description), exc.code

    @app.errorhandler(Exception)
    def handle_generic_exception(exc: Exception):  # noqa: ARG001
        """捕获未处理异常，返回 500 JSON"""
        logger.exception("未处理的异常")
        return jsonify(error="服务器内部错误"), 500

    from assetpkg.web.blueprints.packages_bp import packages_bp
    app.register_blueprint(packages_bp)
    return app
