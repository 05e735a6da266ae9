"""Web 层统一响应辅助函数"""

from __future__ import annotations

from flask import Response, jsonify

from assetpkg.core.exceptions import AssetPkgError

# 业务异常 code → HTTP 状态码；未列出的按 422 处理
STATUS_BY_CODE: dict[str, int] = {
    "PACKAGE_NOT_FOUND": 404,
    "VALIDATION_ERROR": 400,
    "CONFIG_ERROR": 400,
    "CYCLIC_DEPENDENCY": 409,
    "VERSION_CONFLICT": 409,
}


def ok(data: dict, status: int = 200) -> tuple[Response, int] | Response:
    """成功响应"""
    if status == 200:
        return jsonify(data)
    return jsonify(data), status


def not_found(resource: str) -> tuple[Response, int]:
    """资源不存在"""
    return jsonify(error=f"{resource}不存在"), 404


def bad_request(message: str) -> tuple[Response, int]:
    """请求参数错误"""
    return jsonify(error=message), 400


def from_error(exc: AssetPkgError) -> tuple[Response, int]:
    """业务异常转 JSON 响应"""
    return jsonify(error=str(exc), code=exc.code), STATUS_BY_CODE.get(exc.code, 422)
