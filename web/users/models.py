from dataclasses import dataclass
from typing import Optional
from enum import Enum


class UserRole(str, Enum):
    """
    Enumeración de roles de usuario dentro del sistema.

    Hereda de:
    - str  → permite tratar los valores como strings (headers, JSON, APIs)
    - Enum → restringe los valores a los definidos aquí
    """

    ADMIN = "ADMIN"  # Administra equipos (carga CSV, edita, elimina)
    USER = "USER"    # Solo consulta equipos, jugadores y estadísticas


@dataclass
class User:
    """
    Usuario autenticado que hace la petición.
    """

    # Identificador del usuario (None si la petición es anónima)
    id: Optional[int]

    # Rol del usuario dentro del sistema
    role: UserRole
