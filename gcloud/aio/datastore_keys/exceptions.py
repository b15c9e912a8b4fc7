class DatastoreKeyError(Exception):
    pass


class InvalidArgument(DatastoreKeyError, ValueError):
    """A key or path element would violate a structural invariant."""


class IncompleteKey(InvalidArgument):
    """A complete key was required but the terminal element has no id or
    name."""


class InvalidEncoding(DatastoreKeyError, ValueError):
    """Binary or URL-safe input could not be decoded."""
