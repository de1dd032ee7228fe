"""Marketplace error types."""

GENERIC_ERROR = 'An error occurred'


class MarketplaceError(Exception):
    """Base error surfaced to API callers as ``{"success": false, "message": ...}``."""
    status_code = 400

    def __init__(self, message=GENERIC_ERROR, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(MarketplaceError):
    status_code = 400


class AuthError(MarketplaceError):
    """Registration and login failures with user-facing messages."""
    status_code = 400


class Forbidden(MarketplaceError):
    status_code = 403

    def __init__(self, message='Access denied.'):
        super().__init__(message)


class NotFound(MarketplaceError):
    status_code = 404

    def __init__(self, message='Not found.'):
        super().__init__(message)


class InvalidTransition(MarketplaceError):
    """A status change that the state machine does not allow."""
    status_code = 409

    def __init__(self, current, target):
        super().__init__(f'Cannot change status from {current} to {target}.')
        self.current = current
        self.target = target


class StaleState(MarketplaceError):
    """The record changed status between read and write."""
    status_code = 409

    def __init__(self, message='This record was modified by someone else. Please reload.'):
        super().__init__(message)


class ImageUploadError(MarketplaceError):
    status_code = 502

    def __init__(self, message='Image upload failed'):
        super().__init__(message)
