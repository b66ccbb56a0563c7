# Importa utilidades de FastAPI para definir rutas, dependencias y errores HTTP
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile
from loguru import logger

# Servicio de equipos con la lógica de negocio
import services
from services import BadInput, NotFound

# Dependencia que obtiene el usuario autenticado
from web.auth.dependencies import get_current_user

# Guards de permisos
from web.auth.guards import can_read, is_admin

# Schemas de entrada y salida
from web.schemas.team import (
    PaginationQuery,
    PlayerResponse,
    TeamImportResponse,
    TeamResponse,
    TeamStatsResponse,
    TeamSummary,
    TeamUpdate,
)


# Router para endpoints de equipos
# Todos los endpoints aquí tendrán el prefijo /team
router = APIRouter(prefix="/team", tags=["Team"])


def _require_reader(user):
    if not can_read(user):
        raise HTTPException(status_code=403, detail="No autorizado")


def _require_admin(user):
    if not is_admin(user):
        raise HTTPException(status_code=403, detail="No autorizado")


@router.get("", response_model=list[TeamSummary])
def list_teams(current_user=Depends(get_current_user)):
    """
    Lista todos los equipos (solo id y nombre).
    """
    _require_reader(current_user)
    return services.list_teams()


@router.post("", response_model=TeamImportResponse, status_code=201)
def create_teams(
    file: UploadFile = File(...),
    current_user=Depends(get_current_user),
):
    """
    Crea equipos a partir de un archivo CSV (columnas name y description).
    Solo administradores.
    """
    _require_admin(current_user)

    content = file.file.read()
    try:
        created = services.create_teams_from_csv(content, file.filename)
    except BadInput as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"created": created}


# ===============================================
# Rutas fijas: deben ir antes de /team/{team_id}
# ===============================================

@router.get("/players", response_model=list[PlayerResponse])
def list_players(
    query: Annotated[PaginationQuery, Query()],
    current_user=Depends(get_current_user),
):
    """
    Busca jugadores de todos los equipos por nombre y/o apodo.
    """
    _require_reader(current_user)
    logger.info(f"Búsqueda de jugadores: name={query.name!r} nickname={query.nickname!r}")
    return services.list_players(
        page=query.page,
        page_size=query.page_size,
        name=query.name,
        nickname=query.nickname,
    )


@router.get("/stats", response_model=list[TeamStatsResponse])
def team_stats(current_user=Depends(get_current_user)):
    """
    Cantidad de jugadores y mensajes de apoyo por equipo.
    """
    _require_reader(current_user)
    return services.get_team_stats()


@router.get("/{team_id}", response_model=TeamResponse)
def get_team(team_id: int, current_user=Depends(get_current_user)):
    _require_reader(current_user)
    try:
        return services.get_team(team_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{team_id}", status_code=204)
def update_team(
    team_id: int,
    data: TeamUpdate,
    current_user=Depends(get_current_user),
):
    """
    Actualiza nombre y/o descripción de un equipo.
    Solo administradores.
    """
    _require_admin(current_user)

    # Solo los campos que llegaron en el body
    fields = data.model_dump(exclude_unset=True, exclude_none=True)
    try:
        services.update_team(team_id, fields)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    return Response(status_code=204)


@router.delete("/{team_id}", status_code=204)
def delete_team(team_id: int, current_user=Depends(get_current_user)):
    """
    Elimina un equipo junto con sus jugadores.
    Solo administradores.
    """
    _require_admin(current_user)
    try:
        services.delete_team(team_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    return Response(status_code=204)


@router.get("/{team_id}/players", response_model=list[PlayerResponse])
def list_team_players(
    team_id: int,
    query: Annotated[PaginationQuery, Query()],
    current_user=Depends(get_current_user),
):
    """
    Jugadores de un equipo, paginados.
    """
    _require_reader(current_user)
    logger.info(f"Jugadores del equipo {team_id}: page={query.page} page_size={query.page_size}")
    return services.list_players_by_team(
        team_id,
        page=query.page,
        page_size=query.page_size,
        name=query.name,
        nickname=query.nickname,
    )
