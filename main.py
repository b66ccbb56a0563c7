from contextlib import asynccontextmanager

# Importa la clase principal de FastAPI
from fastapi import FastAPI
from loguru import logger

import db
from config import get_db_path
from log_setup import setup_logging

# Router de endpoints de equipos y jugadores
from web.api.teams import router as teams_router


setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Crea las tablas si no existen antes de recibir peticiones
    db.init_db()
    logger.info(f"Base de datos lista en {get_db_path()}")
    yield


# Se crea la instancia principal de la aplicación FastAPI
# Esta es la app que se ejecuta con Uvicorn
app = FastAPI(title="Team Service", lifespan=lifespan)

# Registra las rutas de equipos:
# GET/POST /team, GET/PUT/DELETE /team/{team_id},
# GET /team/players, GET /team/{team_id}/players, GET /team/stats
app.include_router(teams_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
