# sdk/errors.py
from typing import Optional


class ProductClientError(Exception):
    """Base class for every failure surfaced by the productos clients."""


class TransportError(ProductClientError):
    # no response at all: DNS, connect, timeout, dropped connection
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RemoteError(ProductClientError):
    def __init__(self, status_code: int, detail: Optional[str] = None):
        self.status_code = status_code
        self.detail = detail
        msg = f"HTTP {status_code}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
