"""
NLP Server Exception Hierarchy

Every failure of a request maps to exactly one class of this module, which
carries the HTTP status code and the message returned to the caller.
"""
from typing import Iterable, Optional


class NLPServerError(Exception):
    """
    Base class for the errors of the NLP server

    Attributes:
        message: Human-readable error message, safe to return to the caller
        status_code: HTTP status code of the response
    """

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        """Name of the error in the responses"""
        return type(self).__name__


# ==================== Request Errors ====================

class ValidationError(NLPServerError):
    """The request is malformed or misses something required"""

    status_code = 400


class MissingParameters(ValidationError):
    """One or more required parameters are missing"""

    def __init__(self, params: Iterable[str]):
        self.params = list(params)
        super().__init__(f"Missing required parameters: {','.join(self.params)}")


class BlankText(ValidationError):
    """The input text is empty or blank"""

    def __init__(self):
        super().__init__("The text cannot be blank")


class InvalidContentType(ValidationError):
    """The Content-Type header of the request is not the expected one"""

    def __init__(self, expected: str, given: Optional[str]):
        self.expected = expected
        self.given = given or ""
        super().__init__(f"Expected '{expected}', given '{self.given}'")


class InvalidJSONBody(ValidationError):
    """The body of the request does not contain the expected JSON object"""

    def __init__(self, reason: Optional[str] = None):
        message = "The body of the request must be a JSON object"
        super().__init__(f"{message}: {reason}" if reason else message)


class InvalidParameter(ValidationError):
    """A parameter is present but its value is not valid"""

    def __init__(self, name: str, reason: str):
        self.name = name
        super().__init__(f"Invalid parameter '{name}': {reason}")


class LanguageUnresolved(NLPServerError):
    """No language given and no language detector to find it"""

    status_code = 400

    def __init__(self):
        super().__init__("Cannot determine language automatically (missing language detector)")


class LanguageNotSupported(NLPServerError):
    """The requested (or detected) language is not supported by the invoked capability"""

    status_code = 400

    def __init__(self, lang_code: str):
        self.lang_code = lang_code
        super().__init__(f"Not supported language: {lang_code}")


class InvalidDomain(NLPServerError):
    """There is no model associated to the requested domain"""

    status_code = 400

    def __init__(self, domain: str):
        self.domain = domain
        super().__init__(f"Invalid domain: {domain}")


# ==================== Server Errors ====================

class InternalError(NLPServerError):
    """Server-side failure"""

    status_code = 500

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)


class MissingCandidateSource(InternalError):
    """Locations requested without candidates and without a labeler to find them"""

    def __init__(self, domain: Optional[str] = None):
        self.domain = domain
        source = f"labeler '{domain}' not loaded" if domain else "no locations labeler configured"
        super().__init__(f"Missing candidate source: {source}")


# ==================== Startup Errors ====================

class ConfigurationError(NLPServerError):
    """A configured resource cannot be loaded, the server must not start"""

    status_code = 500


class MissingAuxiliaryResource(ConfigurationError):
    """An auxiliary resource (e.g. embeddings) is missing for a key of its primary resource"""

    def __init__(self, resource: str, key: str):
        self.resource = resource
        self.key = key
        super().__init__(f"Missing {resource} for '{key}'")
