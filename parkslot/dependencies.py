# parkslot/dependencies.py
"""
Request-scoped dependencies shared by routers.
Caller identity arrives as X-User-Id from the auth layer in front of this service.
"""

from typing import Optional
from fastapi import Header, HTTPException


def get_caller_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id


def get_optional_caller_id(x_user_id: Optional[str] = Header(default=None)) -> Optional[str]:
    return x_user_id or None
