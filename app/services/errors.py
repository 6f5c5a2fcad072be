"""Domain errors raised by the lifecycle engines."""


class LifecycleError(Exception):
    """Base class for rejected lifecycle operations."""


class NotFoundError(LifecycleError):
    """Raised when a referenced order, tiffin order, patient or menu item does not exist."""


class MissingReferenceError(NotFoundError):
    """Raised when an order is created against an unknown patient or menu item."""


class ValidationError(LifecycleError):
    """Raised when a value falls outside its declared enum or range."""


class TransactionError(LifecycleError):
    """Raised when an atomic multi-step write failed and was rolled back."""
