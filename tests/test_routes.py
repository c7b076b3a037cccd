from ecomission.profile.models import User

API = "/api/v1"


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


class TestProfileRoutes:
    def test_first_access_returns_default_profile(self, client):
        r = client.get(f"{API}/profile")
        assert r.status_code == 200
        data = r.json()
        assert data["points"] == 0
        assert data["lifetimePoints"] == 0
        assert data["totalMissionsCompleted"] == 0
        assert data["inventory"] == []

    def test_rename(self, client):
        r = client.patch(f"{API}/profile", json={"name": "  Mina  "})
        assert r.status_code == 200
        assert r.json()["name"] == "Mina"

    def test_rename_blank(self, client):
        assert client.patch(f"{API}/profile", json={"name": "   "}).status_code == 400

    def test_purchase(self, client, store):
        store.save_user(User(points=100, lifetime_points=100))

        r = client.post(f"{API}/profile/purchase", json={"itemId": "hat", "cost": 60})
        assert r.json()["success"] is True
        assert r.json()["user"]["points"] == 40

        r = client.post(f"{API}/profile/purchase", json={"itemId": "scarf", "cost": 60})
        assert r.status_code == 200
        assert r.json()["success"] is False
        assert r.json()["user"] is None
        assert store.load_user().inventory == ["hat"]

    def test_stage_progress(self, client, store):
        store.save_user(User(points=10, lifetime_points=1600))
        r = client.get(f"{API}/profile/stage")
        assert r.json()["stage"] == "Fruit"
        assert r.json()["nextStage"] == "Tree"

    def test_reset(self, client, store):
        store.save_user(User(name="Mina", points=100, lifetime_points=100))
        r = client.delete(f"{API}/profile")
        assert r.json()["points"] == 0
        assert store.load_user().name != "Mina"


class TestMissionRoutes:
    def test_complete_then_read_back(self, client, sheet):
        mission = {"id": "m-9", "title": "Use the stairs", "points": 25, "type": "energy",
                   "estimatedTimeSeconds": 120, "iconName": "Footprints"}
        r = client.post(f"{API}/missions/complete", json=mission)
        assert r.status_code == 200
        body = r.json()
        assert body["user"]["points"] == 25
        assert body["streak"] == 1
        assert body["log"]["missionId"] == "m-9"

        logs = client.get(f"{API}/missions/logs").json()
        assert [log["title"] for log in logs] == ["Use the stairs"]

        streak = client.get(f"{API}/missions/streak").json()
        assert streak == {"streak": 1, "completedToday": 1}
        assert len(sheet.posted) == 1

    def test_negative_points_rejected(self, client):
        r = client.post(f"{API}/missions/complete", json={"id": "m", "title": "x", "points": -3})
        assert r.status_code == 422


class TestPlacesRoutes:
    def test_seeded_places(self, client):
        data = client.get(f"{API}/places").json()
        assert data["count"] == 3

    def test_add_with_address(self, client):
        r = client.post(f"{API}/places", json={
            "name": "Library", "type": "indoor", "address": "Mapo-gu library",
            "lat": 37.55, "lon": 126.92,
        })
        assert r.status_code == 201
        assert r.json()["type"] == "indoor"
        assert client.get(f"{API}/places").json()["count"] == 4

    def test_replace_list(self, client):
        places = client.get(f"{API}/places").json()["places"]
        r = client.put(f"{API}/places", json=places[:1])
        assert r.json()["count"] == 1
        assert client.get(f"{API}/places").json()["places"][0]["name"] == places[0]["name"]

    def test_replace_rejects_duplicate_ids(self, client):
        places = client.get(f"{API}/places").json()["places"]
        assert client.put(f"{API}/places", json=[places[0], places[0]]).status_code == 400


class TestBackupRoutes:
    def test_restore_for_profile_name(self, client, store, sheet):
        store.save_user(User(name="A", points=5, lifetime_points=5))
        sheet.rows = [{"user": "A", "mission": "Walk", "points": "600P", "timestamp": "2026-10-18T09:00:00Z"}]

        r = client.post(f"{API}/backup/restore")
        body = r.json()
        assert body["success"] is True
        assert body["data"]["user"]["lifetimePoints"] == 600
        assert body["data"]["user"]["stage"] == "Flower"
        assert body["data"]["logs"][0]["type"] == "recovered"

    def test_restore_for_explicit_name(self, client, store, sheet):
        sheet.rows = [{"user": "B", "mission": "Walk", "points": 10}]
        r = client.post(f"{API}/backup/restore", json={"userName": "B"})
        assert r.json()["success"] is True
        assert store.load_user().points == 10

    def test_push_without_history(self, client):
        r = client.post(f"{API}/backup/push")
        assert r.json()["success"] is False

    def test_push_last_mission(self, client, sheet):
        client.post(f"{API}/missions/complete", json={"id": "m", "title": "Tumbler", "points": 10})
        r = client.post(f"{API}/backup/push")
        assert r.json()["success"] is True
        assert [p["mission"] for p in sheet.posted] == ["Tumbler", "Tumbler"]


def test_stage_definitions(client):
    stages = client.get(f"{API}/stages").json()
    assert [s["minPoints"] for s in stages] == [0, 500, 1500, 3000]
