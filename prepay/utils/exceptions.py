class ServiceError(Exception):
    def __init__(self, code="SERVICE_ERROR", message="Service error", details=None, status=400):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status = status
        super().__init__(message)


class UploadRejected(ServiceError):
    pass
