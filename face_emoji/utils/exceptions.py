"""Custom exception classes"""


class FaceEmojiError(Exception):
    """Base exception"""
    pass


class ConfigurationError(FaceEmojiError, ValueError):
    """Invalid configuration value or unusable model setup"""
    pass


class CameraError(FaceEmojiError):
    """
    Camera could not be opened or stopped delivering frames

    Attributes:
        kind: 'permission_denied' | 'not_found' | 'not_readable' | 'unknown'
    """

    KINDS = ('permission_denied', 'not_found', 'not_readable', 'unknown')

    def __init__(self, message: str, kind: str = 'unknown'):
        super().__init__(message)
        self.kind = kind if kind in self.KINDS else 'unknown'
        self.message = message


class InvalidImageError(FaceEmojiError):
    """Invalid image input"""
    pass


class DetectionError(FaceEmojiError):
    """Landmark model failed while processing a frame"""
    pass


class TrackerNotReadyError(FaceEmojiError):
    """FaceTracker used before initialize()"""
    pass
