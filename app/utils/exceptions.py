"""Custom exceptions for the Get IP API."""
from fastapi import HTTPException


class AddressNotFoundError(HTTPException):
    """No address of the requested family was detected."""
    def __init__(self, family: str):
        self.family = family
        super().__init__(status_code=404, detail=f"No {family} address found")


class IPv4NotFoundError(AddressNotFoundError):
    """No IPv4 address was detected."""
    def __init__(self):
        super().__init__("IPv4")


class IPv6NotFoundError(AddressNotFoundError):
    """No IPv6 address was detected."""
    def __init__(self):
        super().__init__("IPv6")
