import asyncio
import shutil
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy.pool import NullPool

from ledger.app.core.database import build_engine, get_db, get_session_maker, init_models
from ledger.app.main import app

ALICE = "7Yx1cQdP3wGqL5oVtN2sZ8bA4mEhRkJf9uWpC6yTnDiS"
BOB = "Hz8NQzqdznZBHQJKijt2XQi77E2PfqwNcmAwGn3bF7kY"


class TestGamesApi(unittest.TestCase):
    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        # NullPool: every request opens its own connection on the client's event loop
        self.engine = build_engine(f"sqlite+aiosqlite:///{self.temp_dir / 'test.db'}", poolclass=NullPool)
        asyncio.run(init_models(self.engine))
        SessionLocal = get_session_maker(self.engine)

        async def override_get_db():
            async with SessionLocal() as session:
                yield session

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

        response = self.client.post("/factories", json={"creator": ALICE})
        self.assertEqual(response.status_code, 201)
        self.factory_id = response.json()["id"]

    def tearDown(self):
        app.dependency_overrides.clear()
        asyncio.run(self.engine.dispose())
        shutil.rmtree(self.temp_dir)

    def new_game(self, player1=ALICE, player2=BOB):
        return self.client.post(
            f"/factories/{self.factory_id}/games",
            json={"player1": player1, "player2": player2},
        )

    def move(self, player, column, game_id=0, **extra):
        return self.client.post(
            f"/factories/{self.factory_id}/games/{game_id}/moves",
            json={"player": player, "column": column, **extra},
        )

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})

    def test_factory(self):
        data = self.client.get(f"/factories/{self.factory_id}").json()
        self.assertEqual(data["game_count"], 0)
        self.assertEqual(data["top_row_mask"], 283691315109952)
        self.assertEqual(data["initial_next_slot"], [0, 7, 14, 21, 28, 35, 42])

    def test_new_game(self):
        response = self.new_game()
        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data["game_id"], 0)
        self.assertEqual(data["player1"], ALICE)
        self.assertEqual(data["player2"], BOB)
        self.assertEqual(data["board"], [0, 0])
        self.assertEqual(data["status"], "Ongoing")
        self.assertEqual(data["version"], 0)

        self.assertEqual(self.new_game().json()["game_id"], 1)
        self.assertEqual(self.client.get(f"/factories/{self.factory_id}").json()["game_count"], 2)

    def test_same_players(self):
        response = self.new_game(BOB, BOB)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "SamePlayers")

    def test_not_found(self):
        self.assertEqual(self.client.get("/factories/42").status_code, 404)
        self.assertEqual(self.client.get(f"/factories/{self.factory_id}/games/3").status_code, 404)
        self.assertEqual(self.move(ALICE, 0, game_id=3).status_code, 404)

    def test_rejected_moves(self):
        self.new_game()
        self.assertEqual(self.move(BOB, 0).json()["code"], "NotPlayerTurn")
        self.assertEqual(self.move(ALICE, 7).json()["code"], "InvalidColumnInput")
        self.assertEqual(self.move(ALICE, -1).status_code, 400)

        game = self.client.get(f"/factories/{self.factory_id}/games/0").json()
        self.assertEqual(game["move_count"], 0)
        self.assertEqual(game["version"], 0)

    def test_vertical_win(self):
        self.new_game()
        for player, column in [(ALICE, 0), (BOB, 1), (ALICE, 0), (BOB, 1), (ALICE, 0), (BOB, 1)]:
            self.assertEqual(self.move(player, column).status_code, 200)

        data = self.move(ALICE, 0).json()
        self.assertEqual(data["board"], [15, 896])
        self.assertEqual(data["move_count"], 7)
        self.assertEqual(data["status"], "Finished")
        self.assertEqual(data["outcome"], "Player1Won")

        response = self.move(BOB, 1)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "GameAlreadyFinished")

    def test_stale_version(self):
        self.new_game()
        self.assertEqual(self.move(ALICE, 2, expected_version=0).status_code, 200)

        response = self.move(BOB, 2, expected_version=0)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "StaleSessionVersion")

    def test_board_view(self):
        self.new_game()
        self.move(ALICE, 3)
        self.move(BOB, 3)

        data = self.client.get(f"/factories/{self.factory_id}/games/0/board").json()
        self.assertEqual(data["grid"][5][3], 1)
        self.assertEqual(data["grid"][4][3], 2)
        self.assertIn("|.|.|.|X|.|.|.|", data["visual"])
        self.assertIn("Column 3: P1, P2", data["description"])
        self.assertEqual(data["valid_columns"], [0, 1, 2, 3, 4, 5, 6])


if __name__ == '__main__':
    unittest.main()
