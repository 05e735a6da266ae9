"""包管理 API Blueprint"""

from __future__ import annotations

from flask import Blueprint, Response, current_app, request

from assetpkg.services.package_service import PackageService
from assetpkg.web.responses import bad_request, not_found, ok

packages_bp = Blueprint("packages", __name__, url_prefix="/api/packages")


def _pkg_svc() -> PackageService:
    from assetpkg.web.app import CONTAINER_KEY
    return current_app.extensions[CONTAINER_KEY].packages


def _write_lock():  # type: ignore[no-untyped-def]
    from assetpkg.web.app import LOCK_KEY
    return current_app.extensions[LOCK_KEY]


@packages_bp.route("/installed", methods=["GET"])
def installed() -> Response:
    return ok({"packages": _pkg_svc().list_installed()})  # type: ignore[return-value]


@packages_bp.route("/available", methods=["GET"])
def available() -> Response:
    return ok({"packages": _pkg_svc().list_available()})  # type: ignore[return-value]


@packages_bp.route("/install", methods=["POST"])
def install() -> tuple[Response, int] | Response:
    body = request.get_json(silent=True) or {}
    strict = body.get("strict", False)
    if not isinstance(strict, bool):
        return bad_request("strict 必须是布尔值")
    with _write_lock():
        packages = _pkg_svc().install_dependencies(strict=strict)
    return ok({"installed": packages})


@packages_bp.route("/<name>/update", methods=["POST"])
def update(name: str) -> tuple[Response, int] | Response:
    with _write_lock():
        package = _pkg_svc().update_package(name)
    return ok({"updated": package})


@packages_bp.route("/<name>", methods=["DELETE"])
def nuke(name: str) -> tuple[Response, int] | Response:
    with _write_lock():
        removed = _pkg_svc().nuke_package(name)
    if not removed:
        return not_found(f"已安装的包 {name} ")
    return ok({"message": f"已清除: {name}"})


@packages_bp.route("", methods=["DELETE"])
def nuke_all() -> tuple[Response, int] | Response:
    with _write_lock():
        count = _pkg_svc().nuke_all_packages()
    return ok({"removed": count})
