import asyncio
import os
import tempfile
import unittest
from unittest import mock

from fastapi.testclient import TestClient

import cache
import db
import services
from main import app

ADMIN = {"X-User-Id": "1", "X-User-Role": "ADMIN"}
USER = {"X-User-Id": "2", "X-User-Role": "USER"}


class TeamApiTests(unittest.TestCase):
    def setUp(self):
        fd, path = tempfile.mkstemp(prefix="team_api_test_", suffix=".db")
        os.close(fd)
        self.db_path = path
        os.environ["DB_PATH"] = self.db_path
        db.init_db()
        cache.clear()

        self.client = TestClient(app)
        self.team_id = db.create_team("Tigers", "Equipo de la ciudad")

    def tearDown(self):
        cache.clear()
        try:
            os.remove(self.db_path)
        except FileNotFoundError:
            pass

    def _upload(self, content, filename="teams.csv", headers=ADMIN):
        return self.client.post(
            "/team",
            files={"file": (filename, content, "text/csv")},
            headers=headers,
        )

    def test_list_teams_without_description(self):
        res = self.client.get("/team", headers=USER)

        self.assertEqual(200, res.status_code)
        self.assertEqual([{"id": self.team_id, "name": "Tigers"}], res.json())

    def test_get_team_unknown_returns_404(self):
        res = self.client.get("/team/999", headers=USER)

        self.assertEqual(404, res.status_code)

    def test_upload_csv_as_admin_creates_teams(self):
        res = self._upload(b"name,description\nA,d1\nB,d2\n")

        self.assertEqual(201, res.status_code)
        self.assertEqual({"created": 2}, res.json())
        self.assertEqual(3, len(self.client.get("/team").json()))

    def test_upload_csv_runs_import_outside_event_loop(self):
        seen = {}
        real_import = services.create_teams_from_csv

        def import_spy(content, filename):
            try:
                asyncio.get_running_loop()
                seen["on_loop"] = True
            except RuntimeError:
                seen["on_loop"] = False
            return real_import(content, filename)

        with mock.patch.object(services, "create_teams_from_csv", import_spy):
            res = self._upload(b"name,description\nA,d1\n")

        self.assertEqual(201, res.status_code)
        self.assertEqual({"on_loop": False}, seen)

    def test_upload_csv_requires_admin(self):
        res = self._upload(b"name,description\nA,d1\n", headers=USER)

        self.assertEqual(403, res.status_code)
        self.assertEqual(1, len(self.client.get("/team").json()))

    def test_upload_wrong_extension_returns_400(self):
        res = self._upload(b"name,description\nA,d1\n", filename="teams.txt")

        self.assertEqual(400, res.status_code)

    def test_unknown_role_is_rejected(self):
        res = self.client.get("/team", headers={"X-User-Role": "GUEST"})

        self.assertEqual(403, res.status_code)

    def test_update_team_only_changes_sent_fields(self):
        res = self.client.put(f"/team/{self.team_id}", json={"name": "X"}, headers=ADMIN)

        self.assertEqual(204, res.status_code)
        team = self.client.get(f"/team/{self.team_id}").json()
        self.assertEqual("X", team["name"])
        self.assertEqual("Equipo de la ciudad", team["description"])

    def test_update_unknown_team_returns_404(self):
        res = self.client.put("/team/999", json={"name": "X"}, headers=ADMIN)

        self.assertEqual(404, res.status_code)

    def test_delete_team(self):
        res = self.client.delete(f"/team/{self.team_id}", headers=ADMIN)

        self.assertEqual(204, res.status_code)
        self.assertEqual(404, self.client.get(f"/team/{self.team_id}").status_code)

    def test_delete_requires_admin(self):
        res = self.client.delete(f"/team/{self.team_id}", headers=USER)

        self.assertEqual(403, res.status_code)

    def test_team_players_are_paginated(self):
        for i in range(7):
            db.create_player(self.team_id, f"Player {i}", f"nick{i}")

        res = self.client.get(
            f"/team/{self.team_id}/players",
            params={"page": 2, "page_size": 5},
        )

        self.assertEqual(200, res.status_code)
        self.assertEqual(2, len(res.json()))

    def test_player_search_rejects_invalid_page(self):
        res = self.client.get("/team/players", params={"page": 0})

        self.assertEqual(422, res.status_code)

    def test_player_search_by_name_and_nickname(self):
        db.create_player(self.team_id, "Anna", "b-one")
        db.create_player(self.team_id, "Carl", "d-one")

        res = self.client.get("/team/players", params={"name": "an", "nickname": "b"})

        self.assertEqual(200, res.status_code)
        self.assertEqual(["Anna"], [p["name"] for p in res.json()])

    def test_stats_use_camel_case_counts(self):
        db.create_player(self.team_id, "Anna", "b-one")
        db.create_support_message(self.team_id, "¡Vamos!")

        res = self.client.get("/team/stats")

        self.assertEqual(200, res.status_code)
        self.assertEqual(
            [{"id": self.team_id, "name": "Tigers", "playerCount": 1, "supportMessageCount": 1}],
            res.json(),
        )


if __name__ == "__main__":
    unittest.main()
