from datetime import datetime, timezone
import uuid

STATUSES = ("pending", "completed", "failed")
FILE_FIELDS = ("file_name", "file_path", "file_size")


def gen_submission_id():
    return str(uuid.uuid4())


class Submission:
    """One registered pre-payment note, optionally carrying an attachment."""

    # fields a partial update may overwrite; id and created_at stay fixed
    UPDATABLE = (
        "content",
        "hospital",
        "category",
        "status",
        "file_name",
        "file_path",
        "file_size",
    )

    def __init__(
        self,
        id,
        content,
        hospital,
        created_at,
        category=None,
        status="pending",
        file_name=None,
        file_path=None,
        file_size=None,
    ):
        self.id = id
        self.content = content
        self.hospital = hospital
        self.category = category
        self.status = status
        self.file_name = file_name
        self.file_path = file_path
        self.file_size = file_size
        self.created_at = created_at

    @property
    def has_file(self):
        return self.file_path is not None

    def copy(self, **changes):
        values = {f: getattr(self, f) for f in self.UPDATABLE}
        values.update(changes)
        return Submission(id=self.id, created_at=self.created_at, **values)

    def to_dict(self):
        return {
            "id": self.id,
            "content": self.content,
            "hospital": self.hospital,
            "category": self.category,
            "fileName": self.file_name,
            "filePath": self.file_path,
            "fileSize": self.file_size,
            "status": self.status,
            "createdAt": self.created_at.isoformat().replace("+00:00", "Z"),
        }

    def __repr__(self):
        return f"<Submission {self.id} {self.hospital} {self.status}>"


def utcnow():
    return datetime.now(timezone.utc)
