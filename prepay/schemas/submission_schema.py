from marshmallow import EXCLUDE, ValidationError, fields, pre_load, validate, validates

from prepay.extensions import ma
from prepay.models.submission import STATUSES


class SubmissionCreateSchema(ma.Schema):
    """Validates the form half of a create request."""

    class Meta:
        unknown = EXCLUDE

    hospital = fields.String(
        required=True, error_messages={"required": "병원을 선택해주세요"}
    )
    content = fields.String(
        required=True, error_messages={"required": "내용을 입력해주세요"}
    )
    category = fields.String(load_default=None, allow_none=True)
    status = fields.String(
        load_default="pending",
        validate=validate.OneOf(STATUSES, error="상태 값이 올바르지 않습니다"),
    )

    def __init__(self, *, hospitals, categories=None, **kwargs):
        super().__init__(**kwargs)
        self.hospitals = list(hospitals)
        self.categories = list(categories) if categories else None

    @pre_load
    def drop_blank_optionals(self, data, **kwargs):
        data = dict(data)
        for key in ("category", "status"):
            if key in data and (data[key] is None or str(data[key]).strip() == ""):
                data.pop(key)
        return data

    @validates("content")
    def validate_content(self, value, **kwargs):
        # whitespace-only notes are empty; the text itself is stored as given
        if not value.strip():
            raise ValidationError("내용을 입력해주세요")

    @validates("hospital")
    def validate_hospital(self, value, **kwargs):
        if value not in self.hospitals:
            raise ValidationError("병원을 선택해주세요")

    @validates("category")
    def validate_category(self, value, **kwargs):
        if value is not None and self.categories and value not in self.categories:
            raise ValidationError("카테고리를 선택해주세요")


class SubmissionUpdateSchema(ma.Schema):
    """Maps PATCH body keys onto record attributes; no value checks."""

    class Meta:
        unknown = EXCLUDE

    content = fields.Raw(allow_none=True)
    hospital = fields.Raw(allow_none=True)
    category = fields.Raw(allow_none=True)
    status = fields.Raw(allow_none=True)
    file_name = fields.Raw(data_key="fileName", allow_none=True)
    file_path = fields.Raw(data_key="filePath", allow_none=True)
    file_size = fields.Raw(data_key="fileSize", allow_none=True)
