# txblocked/errors.py - Error types
"""Error types raised by the TX blocked analyzer."""


class TxBlockedError(Exception):
    """Base class for analyzer errors."""


class InvalidInputError(TxBlockedError):
    """The connection collection is missing or cannot be read."""


class SnapshotFormatError(InvalidInputError):
    """A connection snapshot file is malformed.

    Attributes:
        path: Location of the offending entry inside the snapshot.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class InconsistentDataError(TxBlockedError):
    """Upstream data violates an invariant (negative lifetime or duration).

    Attributes:
        connection_id: Identifier of the offending connection.
    """

    def __init__(self, message: str, connection_id: int) -> None:
        super().__init__(f"connection {connection_id}: {message}")
        self.connection_id = connection_id
