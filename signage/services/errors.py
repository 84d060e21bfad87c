from typing import Any


class NotFoundError(Exception):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, Any]:
        return {"detail": self.message, "code": self.code}


class InvalidSettingError(Exception):
    status_code = 400
    code = "INVALID_SETTING"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, Any]:
        return {"detail": self.message, "code": self.code}
