"""Helpers for attachments arriving on the create endpoint."""

import os
import uuid
from functools import wraps

from flask import current_app, request
from werkzeug.utils import secure_filename

from prepay.utils.exceptions import UploadRejected


def save_uploaded_file(file, upload_dir):
    """Securely save an uploaded file and return the stored name and path."""
    os.makedirs(upload_dir, exist_ok=True)
    stem, ext = os.path.splitext(file.filename or "")
    # secure_filename strips non-ASCII (e.g. Korean) names down to nothing
    ext = secure_filename(ext.lstrip(".")).lower()
    filename = (secure_filename(stem) or "file") + (f".{ext}" if ext else "")
    unique_name = f"{uuid.uuid4().hex}_{filename}"
    file_path = os.path.join(upload_dir, unique_name)
    file.save(file_path)
    return unique_name, file_path


def format_file_size(num_bytes):
    return f"{num_bytes / 1024 / 1024:.2f} MB"


def stream_size(file):
    stream = file.stream
    start = stream.tell()
    try:
        stream.seek(0, os.SEEK_END)
        return stream.tell()
    finally:
        stream.seek(start)


def check_upload(file, allowed_mimetypes, max_size):
    if file.mimetype not in allowed_mimetypes:
        raise UploadRejected(
            "UNSUPPORTED_FILE_TYPE",
            "지원하지 않는 파일 형식입니다.",
            details={"file": [f"Allowed types: {', '.join(allowed_mimetypes)}"]},
            status=415,
        )
    if stream_size(file) > max_size:
        raise UploadRejected(
            "FILE_TOO_LARGE",
            f"파일 크기는 {max_size // (1024 * 1024)}MB를 초과할 수 없습니다.",
            details={"file": [f"Maximum size is {max_size} bytes"]},
            status=413,
        )


def validate_upload(field="file"):
    """Reject an unsupported or oversized attachment before the view runs."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            file = request.files.get(field)
            if file and file.filename:
                check_upload(
                    file,
                    current_app.config["ALLOWED_MIMETYPES"],
                    current_app.config["MAX_UPLOAD_SIZE"],
                )
            return view(*args, **kwargs)

        return wrapper

    return decorator
