from __future__ import annotations


class FramerError(Exception):
    """Base class for every error raised by framer."""


class InvalidGeometry(FramerError):
    pass


class InvalidRadius(FramerError):
    pass


class InvalidBackground(FramerError):
    pass


class InvalidShadow(FramerError):
    pass


class DimensionMismatch(FramerError):
    """Compositing inputs of inconsistent size (caller contract violation)."""


class InvalidParameter(FramerError, ValueError):
    pass


class InputFileNotFound(FramerError):
    pass


class ImageLoadError(FramerError, ValueError):
    pass


class ImageSaveError(FramerError):
    pass
