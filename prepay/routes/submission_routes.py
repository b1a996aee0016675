from flask import Blueprint, current_app, request
from marshmallow import ValidationError

from prepay.extensions import get_nas, get_store
from prepay.schemas.submission_schema import SubmissionUpdateSchema
from prepay.services.submission_service import (
    create_submission,
    delete_submission,
    list_submissions,
    update_submission,
)
from prepay.utils.response_formatter import error_response, success_response
from prepay.utils.uploads import validate_upload

bp = Blueprint("submissions", __name__, url_prefix="/api/submissions")


def _not_found():
    return error_response("NOT_FOUND", "제출물을 찾을 수 없습니다.", status=404)


# ------------------------------------------------------------
# GET /api/submissions?hospital=... — list, newest first
# ------------------------------------------------------------
@bp.route("", methods=["GET"])
def get_submissions():
    try:
        submissions = list_submissions(
            get_store(),
            hospital=request.args.get("hospital"),
            category=request.args.get("category"),
        )
        return success_response([s.to_dict() for s in submissions])
    except Exception:
        current_app.logger.exception("Failed to list submissions")
        return error_response(
            "SERVER_ERROR", "제출물을 가져오는 중 오류가 발생했습니다.", status=500
        )


# ------------------------------------------------------------
# GET /api/submissions/counts — per-tab counts
# ------------------------------------------------------------
@bp.route("/counts", methods=["GET"])
def get_counts():
    field = request.args.get("by") or None
    if field not in (None, "hospital", "category"):
        return error_response(
            "VALIDATION_ERROR", "Unknown count field", {"by": [field]}, status=400
        )
    return success_response(get_store().counts(field))


@bp.route("/<submission_id>", methods=["GET"])
def get_submission(submission_id):
    try:
        submission = get_store().get_by_id(submission_id)
    except Exception:
        current_app.logger.exception("Failed to fetch submission %s", submission_id)
        return error_response(
            "SERVER_ERROR", "제출물을 가져오는 중 오류가 발생했습니다.", status=500
        )
    if submission is None:
        return _not_found()
    return success_response(submission.to_dict())


# ------------------------------------------------------------
# POST /api/submissions — multipart form with optional `file`
# ------------------------------------------------------------
@bp.route("", methods=["POST"])
@validate_upload("file")
def post_submission():
    try:
        submission = create_submission(
            request.form.to_dict(),
            request.files.get("file"),
            store=get_store(),
            config=current_app.config,
            nas=get_nas(),
        )
    except ValidationError as e:
        return error_response(
            "VALIDATION_ERROR",
            "입력 데이터가 올바르지 않습니다.",
            details=e.messages,
            status=400,
        )
    except Exception:
        current_app.logger.exception("Failed to create submission")
        return error_response(
            "SERVER_ERROR", "제출물 생성 중 오류가 발생했습니다.", status=500
        )

    return success_response(submission.to_dict(), status=201)


@bp.route("/<submission_id>", methods=["PATCH"])
def patch_submission(submission_id):
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return error_response(
            "VALIDATION_ERROR", "JSON object expected", status=400
        )

    try:
        fields = SubmissionUpdateSchema().load(data)
        submission = update_submission(submission_id, fields, store=get_store())
    except ValidationError as e:
        return error_response(
            "VALIDATION_ERROR",
            "입력 데이터가 올바르지 않습니다.",
            details=e.messages,
            status=400,
        )
    except Exception:
        current_app.logger.exception("Failed to update submission %s", submission_id)
        return error_response(
            "SERVER_ERROR", "제출물 업데이트 중 오류가 발생했습니다.", status=500
        )

    if submission is None:
        return _not_found()
    return success_response(submission.to_dict())


@bp.route("/<submission_id>", methods=["DELETE"])
def remove_submission(submission_id):
    try:
        deleted = delete_submission(submission_id, store=get_store())
    except Exception:
        current_app.logger.exception("Failed to delete submission %s", submission_id)
        return error_response(
            "SERVER_ERROR", "제출물 삭제 중 오류가 발생했습니다.", status=500
        )

    if not deleted:
        return _not_found()
    return success_response(message="제출물이 삭제되었습니다.")


# ------------------------------------------------------------
# GET /api/submissions/hospital/<hospital>
# ------------------------------------------------------------
@bp.route("/hospital/<hospital>", methods=["GET"])
def get_submissions_by_hospital(hospital):
    try:
        submissions = get_store().list_by("hospital", hospital)
        return success_response([s.to_dict() for s in submissions])
    except Exception:
        current_app.logger.exception("Failed to list submissions for %s", hospital)
        return error_response(
            "SERVER_ERROR",
            "병원별 제출물을 가져오는 중 오류가 발생했습니다.",
            status=500,
        )
