"""
Exception classes for the OCI Object Storage SDK
"""

from typing import Optional, Dict, Any


class OciStorageSDKError(Exception):
    """Base exception for all OCI Storage SDK errors"""

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None,
        operation: Optional[str] = None,
        path: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.operation = operation
        self.path = path

    def __str__(self) -> str:
        context = []
        if self.operation:
            context.append(f"operation={self.operation}")
        if self.path:
            context.append(f"path={self.path}")
        if context:
            return f"{self.message} ({', '.join(context)})"
        return self.message


class ValidationError(OciStorageSDKError):
    """Exception raised for invalid arguments passed to an operation"""

    def __init__(self, message: str, error_code: str = "VALIDATION_ERROR", **kwargs):
        super().__init__(message, error_code, **kwargs)


class ConfigurationError(OciStorageSDKError):
    """Exception raised for invalid or incomplete connection configuration"""

    def __init__(self, message: str, error_code: str = "INVALID_CONFIG", **kwargs):
        super().__init__(message, error_code, **kwargs)


class SignerConfigurationInvalid(ConfigurationError):
    """Identity fields are missing or malformed; raised before any crypto work"""

    def __init__(self, message: str, error_code: str = "SIGNER_CONFIGURATION_INVALID", **kwargs):
        super().__init__(message, error_code, **kwargs)


class KeyMaterialError(ConfigurationError):
    """Exception raised when private key material cannot be resolved"""
    pass


class KeyNotFound(KeyMaterialError):
    """The configured key source does not exist"""

    def __init__(self, message: str, error_code: str = "KEY_NOT_FOUND", **kwargs):
        super().__init__(message, error_code, **kwargs)


class KeyUnreadable(KeyMaterialError):
    """The key source exists but cannot be read"""

    def __init__(self, message: str, error_code: str = "KEY_UNREADABLE", **kwargs):
        super().__init__(message, error_code, **kwargs)


class KeyInvalid(KeyMaterialError):
    """The key content is not a PEM encoded private key"""

    def __init__(self, message: str, error_code: str = "KEY_INVALID", **kwargs):
        super().__init__(message, error_code, **kwargs)


class SigningError(OciStorageSDKError):
    """Exception raised for request signing failures"""

    def __init__(self, message: str, error_code: str = "SIGNING_FAILED", **kwargs):
        super().__init__(message, error_code, **kwargs)


class SignatureGenerationFailed(SigningError):
    """The cryptographic signing call failed (corrupt or unsupported key)"""

    def __init__(self, message: str, error_code: str = "SIGNATURE_GENERATION_FAILED", **kwargs):
        super().__init__(message, error_code, **kwargs)


class ExpiryPolicyError(OciStorageSDKError):
    """Exception raised when a temporary URL lifetime violates the expiry policy"""
    pass


class ExpiryTooLong(ExpiryPolicyError):
    """Requested expiry is beyond the configured maximum"""

    def __init__(self, message: str, error_code: str = "EXPIRY_TOO_LONG", **kwargs):
        super().__init__(message, error_code, **kwargs)


class ExpiryInvalid(ExpiryPolicyError):
    """Requested expiry is in the past or not a usable value"""

    def __init__(self, message: str, error_code: str = "EXPIRY_INVALID", **kwargs):
        super().__init__(message, error_code, **kwargs)


class ServerCommunicationError(OciStorageSDKError):
    """Exception raised for server communication errors"""

    def __init__(
        self,
        message: str,
        error_code: str = "SERVER_ERROR",
        http_status: int = 0,
        details: Optional[Dict[str, Any]] = None,
        failure_class: Optional[str] = None,
        attempts: int = 0,
        **kwargs
    ):
        super().__init__(message, error_code, details, **kwargs)
        self.http_status = http_status
        self.failure_class = failure_class
        self.attempts = attempts


class ObjectNotFound(ServerCommunicationError):
    """The requested object does not exist"""

    def __init__(self, message: str, error_code: str = "OBJECT_NOT_FOUND", http_status: int = 404, **kwargs):
        super().__init__(message, error_code, http_status, **kwargs)


class OperationCancelled(OciStorageSDKError):
    """The caller cancelled the operation or its deadline passed"""

    def __init__(self, message: str, error_code: str = "OPERATION_CANCELLED", **kwargs):
        super().__init__(message, error_code, **kwargs)
