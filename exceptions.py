"""
Exception classes for the criteria weighing app.

Every error the submission handler can answer with lives here, together
with the HTTP status it maps to.
"""


class SubmissionError(Exception):
    """Base exception for all submission handler errors."""
    status_code = 500
    default_message = 'Server error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {'error': self.message}


class MethodNotAllowed(SubmissionError):
    status_code = 405
    default_message = 'Method not allowed'


class ValidationError(SubmissionError):
    status_code = 400
    default_message = 'Missing required data'


class PersistenceError(SubmissionError):
    """The submission row could not be written. Fatal to the request."""
    status_code = 500
    default_message = 'Failed to save data'


class PdfStorageError(SubmissionError):
    """The PDF could not be stored. Logged, never fatal."""
    default_message = 'PDF storage failed'


class UnexpectedError(SubmissionError):
    status_code = 500


class WizardError(Exception):
    """A ranking/comparison transition was rejected."""
    pass
