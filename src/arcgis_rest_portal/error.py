from __future__ import annotations

__all__ = ["PortalRequestError", "PortalHttpResponseError"]


class PortalRequestError(Exception):
    """Exception raised when the portal answers with an error object.

    Attributes:
        message -- explanation of the error
        code -- the portal error code, if one was returned
        details -- the list of detail messages, if any
    """

    def __init__(self, message: str, code: int = None, details: list = None):
        self.message: str = message
        self.code: int = code
        self.details: list = details or []
        super().__init__(self.message)


class PortalHttpResponseError(Exception):
    """Exception raised for http errors.

    Attributes:
        message -- explanation of the error
        status_code -- the HTTP status code of the failed response
    """

    def __init__(self, message: str, status_code: int = None):
        self.message: str = message
        self.status_code: int = status_code
        super().__init__(self.message)
