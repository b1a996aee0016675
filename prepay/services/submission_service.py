import logging
import os

from prepay.schemas.submission_schema import SubmissionCreateSchema
from prepay.utils.uploads import format_file_size, save_uploaded_file, stream_size

logger = logging.getLogger(__name__)


def create_submission(form_data, file=None, *, store, config, nas=None):
    """Validate, attach the uploaded file, push it to the NAS, then store.

    Raises ``marshmallow.ValidationError`` before touching the file or the
    store. The NAS step never fails the create.
    """
    schema = SubmissionCreateSchema(
        hospitals=config["HOSPITALS"], categories=config.get("CATEGORIES")
    )
    data = schema.load(form_data)

    if file and file.filename:
        size = stream_size(file)
        _, file_path = save_uploaded_file(file, config["UPLOAD_FOLDER"])
        data["file_name"] = file.filename
        data["file_path"] = file_path
        data["file_size"] = format_file_size(size)

        if nas is not None:
            push_to_nas(
                nas,
                file_path,
                config.get("NAS_UPLOAD_PATH", "/선납파일"),
                delete_local=config.get("NAS_DELETE_LOCAL", True),
            )

    return store.create(data)


def push_to_nas(nas, file_path, destination, delete_local=True):
    # outcome only decides logging and local cleanup; the record is stored either way
    result = nas.upload_file(file_path, destination)
    if not result.ok:
        logger.warning("NAS upload failed, keeping local copy only: %s", result.reason)
        return result

    logger.info("Stored %s on NAS under %s", os.path.basename(file_path), destination)
    if delete_local and os.path.exists(file_path):
        try:
            os.remove(file_path)
        except OSError as e:
            logger.warning("Could not remove local copy %s: %s", file_path, e)
    return result


def list_submissions(store, *, hospital=None, category=None):
    if category and category != store.all_sentinel:
        return store.list_by("category", category)
    return store.list(hospital)


def update_submission(submission_id, fields, *, store):
    return store.update(submission_id, fields)


def delete_submission(submission_id, *, store):
    submission = store.get_by_id(submission_id)
    if submission is None:
        return False

    if submission.file_path and os.path.exists(submission.file_path):
        os.remove(submission.file_path)

    return store.delete(submission_id)
