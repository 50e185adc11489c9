"""
Showcase Errors

Error kinds raised by the orchestration layer. Every intent handler reports
exactly one of these (or an unexpected exception) through its error callback.
"""


class ShowcaseError(Exception):
    """Base exception for transaction orchestration errors"""

    pass


class ValidationFailed(ShowcaseError):
    """User input rejected before any chain query or hashing"""

    pass


class FieldTooLong(ValidationFailed):
    """A metadata field exceeds its byte limit"""

    def __init__(self, field: str, length: int, limit: int):
        self.field = field
        self.length = length
        self.limit = limit
        super().__init__(f"{field} is too long: {length} bytes (max {limit})")


class PreconditionFailed(ShowcaseError):
    """Required prior state is missing (e.g. update without a mint in this session)"""

    pass


class NotFound(ShowcaseError):
    """No UTxO matched a lookup that required one"""

    pass


class EncodingMismatch(ShowcaseError):
    """CBOR data did not match the requested datum/redeemer shape"""

    pass


class AssemblyFailed(ShowcaseError):
    """Transaction could not be balanced, evaluated or signed"""

    pass


class SubmissionFailed(ShowcaseError):
    """The chain rejected the signed transaction"""

    pass
