import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value, default=False):
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _as_list(value, default):
    if not value:
        return list(default)
    return [v.strip() for v in value.split(",") if v.strip()]


class Config:
    basedir = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(basedir, "uploads"))
    MAX_UPLOAD_SIZE = 10 * 1024 * 1024
    # multipart overhead on top of the attachment itself
    MAX_CONTENT_LENGTH = MAX_UPLOAD_SIZE + 1024 * 1024
    ALLOWED_MIMETYPES = (
        "image/jpeg",
        "image/png",
        "image/gif",
        "application/pdf",
    )

    HOSPITALS = _as_list(
        os.getenv("HOSPITALS"), ["안양병원", "구로병원", "안산병원", "기타"]
    )
    CATEGORIES = _as_list(os.getenv("CATEGORIES"), ["안양", "구로", "안산", "기타"])
    ALL_SENTINEL = "전체"
    SUBMISSION_FILTER_FIELD = os.getenv("SUBMISSION_FILTER_FIELD", "hospital")

    NAS_HOST = os.getenv("NAS_HOST")
    NAS_PORT = os.getenv("NAS_PORT", "5001")
    NAS_USERNAME = os.getenv("NAS_USERNAME", "")
    NAS_PASSWORD = os.getenv("NAS_PASSWORD", "")
    NAS_UPLOAD_PATH = os.getenv("NAS_UPLOAD_PATH", "/선납파일")
    NAS_VERIFY_SSL = _as_bool(os.getenv("NAS_VERIFY_SSL"), default=True)
    NAS_TIMEOUT = int(os.getenv("NAS_TIMEOUT", 60))
    NAS_DELETE_LOCAL = _as_bool(os.getenv("NAS_DELETE_LOCAL"), default=True)


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    NAS_HOST = None


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
