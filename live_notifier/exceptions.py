"""Exception hierarchy for the live notifier."""

from __future__ import annotations


class NotifierException(Exception):
    """
    Base exception class for this application.
    """

    def __init__(self, *args: object):
        if args:
            super().__init__(*args)
        else:
            super().__init__("Unknown error")


class ExitRequest(NotifierException):
    """
    Raised when the application is requested to exit from outside of the main loop.

    Intended for internal use only.
    """

    def __init__(self):
        super().__init__("Application was requested to exit")


class RequestException(NotifierException):
    """
    Raised for cases where a web request doesn't return what we wanted it to.
    """

    def __init__(self, *args: object):
        if args:
            super().__init__(*args)
        else:
            super().__init__("Unknown error during request")


class HelixException(RequestException):
    """
    Raised when the Helix API responds with a non-success status.
    """

    def __init__(self, status: int, message: str):
        super().__init__(f"Helix error {status}: {message}")
        self.status: int = status


class AuthFailure(NotifierException):
    """
    Raised when the client credentials could not be exchanged for an access token.
    """

    def __init__(self, *args: object):
        if args:
            super().__init__(*args)
        else:
            super().__init__("Unable to obtain an access token")


class FetchFailure(NotifierException):
    """
    Raised when the information for a single channel could not be fetched.
    """

    def __init__(self, identifier: str, reason: str = ""):
        message = f"Failed to fetch channel info for {identifier}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.identifier: str = identifier


class ConfigPersistFailure(NotifierException):
    """
    Raised when the settings file could not be written.
    """

    def __init__(self, *args: object):
        if args:
            super().__init__(*args)
        else:
            super().__init__("Failed to save settings")
