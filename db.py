import sqlite3
from contextlib import closing

from config import get_db_path


def _casefold(value):
    # LIKE de SQLite solo ignora mayúsculas en ASCII; "Á" y "á" no coinciden
    return value.casefold() if isinstance(value, str) else value


def get_connection():
    """Devuelve una conexión a la base de datos SQLite."""
    conn = sqlite3.connect(get_db_path())
    conn.row_factory = sqlite3.Row
    # SQLite no aplica las llaves foráneas si no se activan por conexión
    conn.execute("PRAGMA foreign_keys = ON")
    conn.create_function("casefold", 1, _casefold, deterministic=True)
    return conn


def init_db():
    """Crea las tablas básicas si no existen."""
    with closing(get_connection()) as conn:
        cur = conn.cursor()

        # Tabla de equipos
        cur.execute("""
            CREATE TABLE IF NOT EXISTS teams (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                description TEXT NOT NULL
            );
        """)

        # Tabla de jugadores (cada jugador pertenece a un equipo)
        # Al borrar un equipo se borran sus jugadores (CASCADE)
        cur.execute("""
            CREATE TABLE IF NOT EXISTS players (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                nickname TEXT NOT NULL,
                team_id INTEGER NOT NULL,
                FOREIGN KEY (team_id) REFERENCES teams(id) ON DELETE CASCADE
            );
        """)

        # Mensajes de apoyo a un equipo (solo se cuentan en las estadísticas)
        cur.execute("""
            CREATE TABLE IF NOT EXISTS support_messages (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                team_id INTEGER NOT NULL,
                content TEXT,
                created_at TEXT DEFAULT (datetime('now')),
                FOREIGN KEY (team_id) REFERENCES teams(id) ON DELETE CASCADE
            );
        """)

        # Índices recomendados
        cur.execute("CREATE INDEX IF NOT EXISTS idx_players_team_id ON players(team_id)")
        cur.execute("CREATE INDEX IF NOT EXISTS idx_support_messages_team_id ON support_messages(team_id)")

        conn.commit()


# ---------------------------------------------------------------------------
# Equipos
# ---------------------------------------------------------------------------

def get_all_teams():
    """Lista todos los equipos, solo id y nombre."""
    with closing(get_connection()) as conn:
        cur = conn.cursor()
        cur.execute("SELECT id, name FROM teams ORDER BY id")
        rows = cur.fetchall()
    return [dict(row) for row in rows]


def get_team_by_id(team_id: int):
    with closing(get_connection()) as conn:
        cur = conn.cursor()
        cur.execute("SELECT id, name, description FROM teams WHERE id = ?", (team_id,))
        row = cur.fetchone()
    return dict(row) if row else None


def create_team(name: str, description: str) -> int:
    with closing(get_connection()) as conn:
        cur = conn.cursor()
        cur.execute(
            "INSERT INTO teams (name, description) VALUES (?, ?)",
            (name, description),
        )
        conn.commit()
        return cur.lastrowid


def create_teams_bulk(teams) -> int:
    """
    Inserta varios equipos en una sola operación.

    `teams` es una lista de dicts con las llaves name y description.
    Retorna el número de filas insertadas.
    """
    with closing(get_connection()) as conn:
        cur = conn.cursor()
        cur.executemany(
            "INSERT INTO teams (name, description) VALUES (?, ?)",
            [(t["name"], t["description"]) for t in teams],
        )
        conn.commit()
    return len(teams)


# Columnas que se pueden modificar desde update_team
_TEAM_UPDATABLE_FIELDS = ("name", "description")


def update_team(team_id: int, fields: dict):
    """Actualiza solo las columnas presentes en `fields`."""
    changes = [(k, v) for k, v in fields.items() if k in _TEAM_UPDATABLE_FIELDS]
    if not changes:
        return

    set_clause = ", ".join(f"{column} = ?" for column, _ in changes)
    params = [value for _, value in changes] + [team_id]

    with closing(get_connection()) as conn:
        conn.execute(f"UPDATE teams SET {set_clause} WHERE id = ?", params)
        conn.commit()


def delete_team(team_id: int):
    with closing(get_connection()) as conn:
        conn.execute("DELETE FROM teams WHERE id = ?", (team_id,))
        conn.commit()


def get_team_stats():
    """
    Cantidad de jugadores y de mensajes de apoyo por equipo.

    Retorna una lista de dicts: id, name, player_count, support_message_count.
    """
    with closing(get_connection()) as conn:
        cur = conn.cursor()
        cur.execute("""
            SELECT
                t.id AS id,
                t.name AS name,
                COUNT(DISTINCT p.id) AS player_count,
                COUNT(DISTINCT sm.id) AS support_message_count
            FROM teams t
            LEFT JOIN players p ON p.team_id = t.id
            LEFT JOIN support_messages sm ON sm.team_id = t.id
            GROUP BY t.id
            ORDER BY t.id
        """)
        rows = cur.fetchall()
    return [dict(row) for row in rows]


# ---------------------------------------------------------------------------
# Jugadores
# ---------------------------------------------------------------------------

def create_player(team_id: int, name: str, nickname: str) -> int:
    with closing(get_connection()) as conn:
        cur = conn.cursor()
        cur.execute(
            "INSERT INTO players (name, nickname, team_id) VALUES (?, ?, ?)",
            (name, nickname, team_id),
        )
        conn.commit()
        return cur.lastrowid


def find_players(team_id: int = None, name: str = None, nickname: str = None,
                 limit: int = None, offset: int = None):
    """
    Busca jugadores con filtros opcionales combinados con AND.

    - team_id: solo jugadores de ese equipo
    - name / nickname: coincidencia parcial sin distinguir mayúsculas,
      también en letras acentuadas (LIKE %valor% sobre casefold)
    - limit / offset: paginación; si limit es None no se pagina
    """
    where = []
    params = []

    if team_id is not None:
        where.append("team_id = ?")
        params.append(team_id)

    if name:
        where.append("casefold(name) LIKE ?")
        params.append(f"%{name.casefold()}%")

    if nickname:
        where.append("casefold(nickname) LIKE ?")
        params.append(f"%{nickname.casefold()}%")

    sql = "SELECT id, name, nickname, team_id FROM players"
    if where:
        sql += " WHERE " + " AND ".join(where)
    sql += " ORDER BY id"

    if limit is not None:
        sql += " LIMIT ? OFFSET ?"
        params.extend([limit, offset or 0])

    with closing(get_connection()) as conn:
        cur = conn.cursor()
        cur.execute(sql, params)
        rows = cur.fetchall()
    return [dict(row) for row in rows]


# ---------------------------------------------------------------------------
# Mensajes de apoyo
# ---------------------------------------------------------------------------

def create_support_message(team_id: int, content: str = None) -> int:
    with closing(get_connection()) as conn:
        cur = conn.cursor()
        cur.execute(
            "INSERT INTO support_messages (team_id, content) VALUES (?, ?)",
            (team_id, content),
        )
        conn.commit()
        return cur.lastrowid


def count_support_messages(team_id: int) -> int:
    with closing(get_connection()) as conn:
        cur = conn.cursor()
        cur.execute("SELECT COUNT(*) FROM support_messages WHERE team_id = ?", (team_id,))
        return cur.fetchone()[0]
