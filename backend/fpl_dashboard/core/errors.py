"""Error taxonomy for the refresh pipeline and the read path."""


class SnapshotError(Exception):
    """Base class for every failure raised by the snapshot services."""


class UpstreamUnavailable(SnapshotError):
    """Network error or non-2xx answer from the feed."""


class UpstreamTimeout(SnapshotError):
    """The feed did not answer within FPL_TIMEOUT_S."""


class UpstreamMalformed(SnapshotError):
    """The feed answered but its document cannot be used."""


class StoreWriteFailed(SnapshotError):
    """The refresh transaction failed and was rolled back."""


class AlreadyInProgress(SnapshotError):
    """Another refresh holds the single-flight guard."""


class NotFound(SnapshotError):
    pass
