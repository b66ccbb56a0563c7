from .models import UserRole

"""
Reglas de acceso basadas en roles (RBAC).

Centraliza qué roles pueden ejecutar las acciones
que modifican equipos.
"""


# Roles que pueden crear, editar y eliminar equipos
ADMIN_ALLOWED = {
    UserRole.ADMIN
}

# Roles que pueden consultar equipos, jugadores y estadísticas
READ_ALLOWED = {
    UserRole.ADMIN,
    UserRole.USER
}
