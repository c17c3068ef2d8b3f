# /app/core/deps.py

"""
Request-scoped dependencies shared by the routers.

Authentication happens in front of this service; the authenticated caller
arrives as the `X-Professor-Id` header and is resolved to a professor here.
"""

from fastapi import Depends, Header, HTTPException, status

from ..services.database_service import DatabaseService, get_db_service


def get_current_professor_id(
    x_professor_id: str = Header(default="", alias="X-Professor-Id"),
    db: DatabaseService = Depends(get_db_service),
) -> str:
    professor_id = x_professor_id.strip()
    if not professor_id or db.get_professor_by_id(professor_id) is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    return professor_id
