"""
Error taxonomy for the analyze operation.

Each error carries the message shown to the user and the HTTP status
the API answers with.
"""


class FeedbackError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(FeedbackError):
    """Caller must fix the request and resubmit."""

    status_code = 400


class ConfigurationError(FeedbackError):
    """Deployment is missing something (e.g. the API key)."""

    status_code = 500


class ProviderResponseError(FeedbackError):
    """Provider call failed or its reply could not be parsed."""

    status_code = 500
