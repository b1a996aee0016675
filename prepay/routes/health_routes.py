from datetime import datetime, timezone

from flask import Blueprint

from prepay.extensions import get_nas
from prepay.utils.response_formatter import success_response

bp = Blueprint("health", __name__, url_prefix="/api")


@bp.route("/health", methods=["GET"])
def health():
    return success_response({
        "status": "온라인",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    })


@bp.route("/nas/status", methods=["GET"])
def nas_status():
    nas = get_nas()
    if nas is None:
        return success_response(
            {"status": "disabled", "message": "NAS integration is not configured"},
            status=503,
        )

    result = nas.check_connection()
    if result.ok:
        return success_response({"status": "connected", "message": "NAS 연결 정상"})
    return success_response(
        {"status": "disconnected", "message": "NAS 연결 실패"}, status=503
    )
