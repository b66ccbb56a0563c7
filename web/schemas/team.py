# BaseModel es la clase base de Pydantic
# Se usa para validar y serializar datos de entrada y salida en la API
from typing import Optional

from pydantic import BaseModel, Field


# Equipo en listados: solo id y nombre
class TeamSummary(BaseModel):
    id: int
    name: str


# Equipo completo
class TeamResponse(BaseModel):
    id: int
    name: str
    description: str


# Cuerpo de PUT /team/{id}; solo se aplican los campos enviados
class TeamUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


# Respuesta de la carga de equipos por CSV
class TeamImportResponse(BaseModel):
    created: int


class PlayerResponse(BaseModel):
    id: int
    name: str
    nickname: str
    team_id: int


# Estadísticas por equipo
# Se envían con nombres camelCase (playerCount, supportMessageCount)
class TeamStatsResponse(BaseModel):
    id: int
    name: str
    player_count: int = Field(serialization_alias="playerCount")
    support_message_count: int = Field(serialization_alias="supportMessageCount")


# Parámetros de paginación y búsqueda de jugadores
class PaginationQuery(BaseModel):
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1)
    name: Optional[str] = None
    nickname: Optional[str] = None
