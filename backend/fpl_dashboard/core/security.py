import secrets

from fastapi import Depends, HTTPException
from fastapi.security import APIKeyHeader

from fpl_dashboard.core.config import settings

api_key_scheme = APIKeyHeader(name="X-API-Key", auto_error=False)


def require_admin(api_key: str | None = Depends(api_key_scheme)) -> None:
    expected = settings.ADMIN_API_KEY
    if not expected:
        return
    if api_key is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    if not secrets.compare_digest(api_key, expected):
        raise HTTPException(status_code=403, detail="Admin privileges required")
