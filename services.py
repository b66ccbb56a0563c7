import csv
import io
import json
from typing import Any, Dict, List, Optional

from loguru import logger

import cache
from config import PLAYER_SEARCH_TTL_MS
from db import (
    get_all_teams, get_team_by_id, create_teams_bulk,
    update_team as db_update_team, delete_team as db_delete_team,
    find_players, get_team_stats as db_get_team_stats,
)

# Claves del cache
PLAYER_SEARCH_CACHE_KEY = "searchAllPlayers"
TEAM_STATS_CACHE_KEY = "teamStats"

# Columnas obligatorias en el CSV de equipos
REQUIRED_CSV_COLUMNS = ("name", "description")


class TeamServiceError(Exception):
    """Error base del servicio de equipos. El mensaje se muestra al usuario."""


class BadInput(TeamServiceError):
    """Archivo o datos de entrada inválidos."""


class NotFound(TeamServiceError):
    """El equipo solicitado no existe."""


# ===========================================================================
# Equipos
# ===========================================================================

def list_teams() -> List[Dict[str, Any]]:
    """Todos los equipos, solo con id y nombre."""
    return get_all_teams()


def get_team(team_id: int) -> Dict[str, Any]:
    return _require_team(team_id)


def create_teams_from_csv(file_bytes: bytes, filename: str) -> int:
    """
    Crea equipos a partir de un archivo CSV.

    El archivo debe tener encabezado y las columnas name y description.
    La validación es todo o nada: si una fila no trae alguna de las dos
    columnas no se crea ningún equipo. Las columnas extra se ignoran.

    Retorna la cantidad de equipos creados.
    """
    if not (filename or "").endswith(".csv"):
        raise BadInput("Solo se permiten archivos CSV.")

    try:
        content = file_bytes.decode("utf-8-sig")
        # DictReader ya omite las líneas vacías
        rows = list(csv.DictReader(io.StringIO(content)))
    except (UnicodeDecodeError, csv.Error) as e:
        logger.warning(f"No se pudo leer el CSV {filename!r}: {e}")
        raise BadInput("No se pudo procesar el archivo CSV.") from e

    for row in rows:
        if any(row.get(column) is None for column in REQUIRED_CSV_COLUMNS):
            raise BadInput("El archivo CSV debe incluir las columnas name y description.")

    teams = [{"name": row["name"], "description": row["description"]} for row in rows]
    created = create_teams_bulk(teams) if teams else 0
    logger.info(f"Importación CSV {filename!r}: {created} equipos creados")
    return created


def update_team(team_id: int, fields: Dict[str, Any]) -> None:
    """Actualiza solo los campos enviados (name y/o description)."""
    _require_team(team_id)
    db_update_team(team_id, fields)


def delete_team(team_id: int) -> None:
    """Elimina el equipo. Sus jugadores y mensajes de apoyo se borran en cascada."""
    _require_team(team_id)
    db_delete_team(team_id)
    logger.info(f"Equipo {team_id} eliminado")


def _require_team(team_id: int) -> Dict[str, Any]:
    # Siempre consulta la base; la existencia no se cachea
    team = get_team_by_id(team_id)
    if team is None:
        raise NotFound("El equipo no existe.")
    return team


# ===========================================================================
# Jugadores
# ===========================================================================

def _player_search_cache_key(name: str, nickname: str) -> str:
    return f"{PLAYER_SEARCH_CACHE_KEY}:{json.dumps([name, nickname])}"


def list_players(page: int = 1, page_size: int = 10,
                 name: Optional[str] = None, nickname: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Busca jugadores de todos los equipos por nombre y/o apodo.

    page y page_size se aceptan pero esta búsqueda no pagina.
    Cuando llegan nombre y apodo el resultado se guarda en cache por
    PLAYER_SEARCH_TTL_MS milisegundos.
    """
    if name and nickname:
        key = _player_search_cache_key(name, nickname)
        players = cache.get(key)
        if players is not None:
            logger.debug(f"Cache hit: {key}")
            return players

        players = find_players(name=name, nickname=nickname)
        cache.set(key, players, PLAYER_SEARCH_TTL_MS)
        return players

    return find_players(name=name, nickname=nickname)


def list_players_by_team(team_id: int, page: int = 1, page_size: int = 10,
                         name: Optional[str] = None, nickname: Optional[str] = None) -> List[Dict[str, Any]]:
    """Jugadores de un equipo, paginados y con los mismos filtros opcionales."""
    return find_players(
        team_id=team_id,
        name=name,
        nickname=nickname,
        limit=page_size,
        offset=(page - 1) * page_size,
    )


# ===========================================================================
# Estadísticas
# ===========================================================================

def get_team_stats() -> List[Dict[str, Any]]:
    """
    Cantidad de jugadores y de mensajes de apoyo por equipo.

    Se cachea sin expiración; los cambios posteriores no se reflejan
    hasta que el cache se vacíe.
    """
    stats = cache.get(TEAM_STATS_CACHE_KEY)
    if stats is None:
        stats = db_get_team_stats()
        cache.set(TEAM_STATS_CACHE_KEY, stats)
    else:
        logger.debug(f"Cache hit: {TEAM_STATS_CACHE_KEY}")
    return stats
