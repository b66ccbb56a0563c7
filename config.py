import os

from dotenv import load_dotenv

# Carga variables desde .env (si existe) antes de leer la configuración
load_dotenv()

# Nivel de logs de la aplicación (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Capacidad máxima del cache en memoria (número de claves)
CACHE_MAXSIZE = int(os.getenv("CACHE_MAXSIZE", "1024"))

# Tiempo de vida del cache de búsqueda de jugadores, en milisegundos (5 minutos)
PLAYER_SEARCH_TTL_MS = int(os.getenv("PLAYER_SEARCH_TTL_MS", str(1000 * 60 * 5)))

# Ruta por defecto del archivo SQLite
DEFAULT_DB_PATH = "teams.db"


def get_db_path() -> str:
    """Ruta de la base de datos. Se lee en cada llamada para poder cambiarla en pruebas."""
    return os.getenv("DB_PATH", DEFAULT_DB_PATH)
