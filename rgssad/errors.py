class RgssadError(Exception):
    """Base class for RGSSAD-specific errors."""


class MalformedStream(RgssadError):
    """Unexpected end of stream while reading a bounded field."""


class InvalidArchive(RgssadError):
    pass


# Entry table / payload consistency
class CorruptArchive(RgssadError):
    pass


class TruncatedArchive(RgssadError):
    pass
