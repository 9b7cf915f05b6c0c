"""Errors raised by the scoring core and the store, mapped to HTTP by the app."""


class ZoneboardError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ZoneboardError):
    """An athlete, activity or competition config did not resolve."""

    status_code = 404
