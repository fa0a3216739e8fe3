# core/errors.py

class ConfigurationError(ValueError):
    """
    Raised when camera or scene parameters are invalid. Always raised before
    any pixel is rendered.
    """

class CameraNotInitializedError(RuntimeError):
    """
    Raised when rays are requested from a camera before initialize() ran.
    """

class RenderError(RuntimeError):
    """
    Raised when a render worker fails. The worker's exception is chained as
    __cause__ and no image is produced.
    """
    def __init__(self, message: str, stripe: int = -1):
        super().__init__(message)
        self.stripe = stripe
