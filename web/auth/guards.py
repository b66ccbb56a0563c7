# Importa el conjunto de roles que tienen permisos administrativos
from web.users.roles import ADMIN_ALLOWED, READ_ALLOWED


def can_read(user) -> bool:
    """
    Verifica si el usuario puede consultar equipos y jugadores.
    """
    return user.role in READ_ALLOWED


def is_admin(user) -> bool:
    """
    Verifica si el usuario tiene permisos administrativos.

    Retorna True si el rol del usuario pertenece
    al conjunto de roles administradores.
    """
    return user.role in ADMIN_ALLOWED
