from typing import Optional

from fastapi import Header, HTTPException

from web.users.models import User, UserRole


def get_current_user(
    x_user_id: Optional[int] = Header(None),
    x_user_role: str = Header(UserRole.USER.value),
):
    """
    Usuario autenticado de la petición.

    Dependencia de FastAPI. La autenticación la hace el gateway que está
    delante de este servicio y nos pasa el usuario en los headers
    X-User-Id y X-User-Role. Sin header de rol se asume USER.
    """
    try:
        role = UserRole(x_user_role.upper())
    except ValueError:
        raise HTTPException(status_code=403, detail="Rol no válido")

    return User(id=x_user_id, role=role)
