"""Custom exception classes for tribe-deployments library."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when requested network is not configured."""

    pass


class SignerUnavailableError(DeploymentError, LookupError):
    """Raised when no deployment account can be resolved."""

    pass


class DeployFailedError(DeploymentError, RuntimeError):
    """Raised when contract deployment submission fails or reverts."""

    pass


class RegistryWriteError(DeploymentError, OSError):
    """Raised when the deployment registry cannot be written."""

    pass


class MalformedRegistryError(DeploymentError, ValueError):
    """Raised when an existing registry file cannot be decoded."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a compiled contract artifact is not found."""

    pass


class VerificationError(DeploymentError, RuntimeError):
    """Raised when block explorer source verification fails."""

    pass


class ConfirmationError(DeploymentError, RuntimeError):
    """Raised when waiting for block confirmations fails."""

    pass
