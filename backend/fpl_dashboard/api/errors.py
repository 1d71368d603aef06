from fastapi import HTTPException

from fpl_dashboard.core.errors import (
    AlreadyInProgress,
    NotFound,
    SnapshotError,
    StoreWriteFailed,
    UpstreamMalformed,
    UpstreamTimeout,
    UpstreamUnavailable,
)

STATUS_BY_ERROR = {
    NotFound: 404,
    AlreadyInProgress: 409,
    UpstreamTimeout: 504,
    UpstreamUnavailable: 502,
    UpstreamMalformed: 502,
    StoreWriteFailed: 500,
}


def to_http(exc: SnapshotError) -> HTTPException:
    for cls, status in STATUS_BY_ERROR.items():
        if isinstance(exc, cls):
            return HTTPException(status_code=status, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
