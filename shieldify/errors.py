"""
Application exceptions.

Services raise these; routes translate them into flashes, form errors,
not-found panels or JSON error bodies.
"""


class ShieldifyError(Exception):
    """Base class for errors raised by the service layer."""

    def __init__(self, message=''):
        super().__init__(message)
        self.message = message


class ValidationError(ShieldifyError):
    """Field-scoped validation failure; ``errors`` maps field name to message."""

    def __init__(self, errors):
        super().__init__('; '.join(f'{field}: {msg}' for field, msg in errors.items()))
        self.errors = dict(errors)


class AuthorizationError(ShieldifyError):
    pass


class ReportNotFound(ShieldifyError):
    def __init__(self, report_id):
        super().__init__(f'Report {report_id} not found')
        self.report_id = report_id


class PersistenceError(ShieldifyError):
    """The store rejected or failed an operation; safe to retry."""
