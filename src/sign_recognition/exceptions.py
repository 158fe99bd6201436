"""
Custom exceptions for sign recognition.
"""


class SignRecognitionError(Exception):
    """Base exception for sign recognition errors."""
    pass


class ModelFormatError(SignRecognitionError):
    """Raised when a serialized model does not match the sample record shape."""
    pass


class StorageError(SignRecognitionError):
    """Raised when the sample store cannot be read from or written to storage."""
    pass
