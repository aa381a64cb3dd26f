from __future__ import annotations

from typing import Optional

from itemsvc.config import JSON_CONTENT_TYPE


class ItemServiceError(Exception):
    status_code: int = 500
    message: str = "internal error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MalformedBodyError(ItemServiceError):
    status_code = 400
    message = "malformed request body"


class ItemNotFoundError(ItemServiceError):
    status_code = 404
    message = ""

    def __init__(self, key: str):
        self.key = key
        super().__init__()


class MethodNotAllowedError(ItemServiceError):
    status_code = 405
    message = "method not allowed"


class UnsupportedMediaTypeError(ItemServiceError):
    status_code = 415

    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(
            f"need content-type '{JSON_CONTENT_TYPE}', but got '{content_type}'"
        )


class SerializationError(ItemServiceError):
    status_code = 500
