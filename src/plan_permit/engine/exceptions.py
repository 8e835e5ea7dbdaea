"""
Exception and Error Definitions Module

Defines the exception hierarchy raised while building and checking plan
permit signatures. All exceptions inherit from PlanPermitError so callers
can catch every package-specific failure with a single clause.

Exception Hierarchy:
    PlanPermitError (root)
    ├── ResolutionError
    ├── SigningError
    ├── ConfigurationError
    └── PermitVerificationError
"""


class PlanPermitError(Exception):
    """
    Root exception class for all project-specific exceptions.

    All custom exceptions should inherit from this class to enable
    unified exception handling.
    """
    pass


class ResolutionError(PlanPermitError):
    """
    Raised when a permit parameter cannot be obtained from a collaborator.

    This includes scenarios such as:
    - ``getPlan(tokenId)`` reverting for an unknown token identifier
    - The plan record not exposing a nonce
    - The plan manager ``name()`` call failing
    - The signer being unable to report its chain identifier

    The collaborator's original exception is attached as ``__cause__``.

    Attributes:
        field: Name of the permit parameter that failed to resolve
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"Failed to resolve permit {field}: {message}")
        self.field = field


class SigningError(PlanPermitError):
    """
    Raised when the signing capability cannot produce a signature.

    This includes scenarios such as:
    - Unavailable or malformed private key
    - Typed-data payload rejected by the signer
    - Remote signer unreachable
    """
    pass


class ConfigurationError(PlanPermitError):
    """
    Raised when configuration is missing or invalid.

    This includes scenarios such as:
    - Missing private key in the environment
    - Missing RPC URL in the environment
    """
    pass


class PermitVerificationError(PlanPermitError):
    """
    Raised when a permit signature cannot be checked.

    This covers malformed v/r/s components that prevent address recovery;
    a well-formed signature from the wrong signer is reported as ``False``
    by the verifier rather than raised.
    """
    pass
