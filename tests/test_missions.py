from datetime import date, timedelta
from types import SimpleNamespace

import pytest

import ecomission.missions.service as mission_service
from ecomission.backup.service import BackupService
from ecomission.core.config import Settings
from ecomission.core.exceptions import UpstreamException
from ecomission.missions.models import Mission, MissionLog
from ecomission.missions.openai_service import parse_suggestions
from ecomission.missions.service import MissionService

MISSION = Mission(id="m-1", title="Pick up three pieces of litter", points=40, type="nature")


@pytest.fixture
def missions(store, profile, backup):
    return MissionService(store, profile, backup)


class TestCompleteMission:
    @pytest.mark.asyncio
    async def test_awards_logs_and_pushes(self, store, missions, sheet):
        result = await missions.complete_mission(MISSION)

        assert result.user.points == 40
        assert result.user.total_missions_completed == 1
        assert result.log.title == MISSION.title
        assert result.log.mission_id == "m-1"
        assert result.log.type == "nature"
        assert result.log.completed_at.startswith(date.today().isoformat())
        assert result.streak == 1
        assert result.backup_message is not None

        assert [log.id for log in store.load_logs()] == [result.log.id]
        assert sheet.posted[0]["mission"] == MISSION.title
        assert sheet.posted[0]["points"] == 40

    @pytest.mark.asyncio
    async def test_without_backup_url_nothing_is_sent(self, store, profile):
        backup = BackupService(store, Settings(BACKUP_SHEET_URL=""))
        result = await MissionService(store, profile, backup).complete_mission(MISSION)
        assert result.backup_message is None
        assert store.load_user().points == 40

    @pytest.mark.asyncio
    async def test_same_millisecond_completions_get_distinct_ids(self, store, missions, monkeypatch):
        monkeypatch.setattr(mission_service, "time", SimpleNamespace(time=lambda: 1760000000.0))

        first = await missions.complete_mission(MISSION)
        second = await missions.complete_mission(MISSION)

        assert first.log.id == "1760000000000"
        assert second.log.id == "1760000000001"
        assert [log.id for log in store.load_logs()] == ["1760000000000", "1760000000001"]


def test_completed_titles_today(store, missions):
    today = date.today()
    yesterday = today - timedelta(days=1)
    store.save_logs([
        MissionLog(id="1", mission_id="a", title="Yesterday's walk", points=5,
                   completed_at=f"{yesterday.isoformat()}T20:00:00+09:00"),
        MissionLog(id="2", mission_id="b", title="Tumbler", points=5,
                   completed_at=f"{today.isoformat()}T08:00:00+09:00"),
    ])
    assert missions.completed_titles_today() == ["Tumbler"]

    streak = missions.streak()
    assert streak.streak == 2
    assert streak.completed_today == 1


def test_append_log(store, missions):
    entry = MissionLog(id="x", mission_id="a", title="t", completed_at="2026-10-19T08:00:00+09:00")
    missions.append_log(entry)
    assert store.load_logs() == [entry]


class TestParseSuggestions:
    def test_fenced_json(self):
        content = """```json
{"locationContext": "A quiet residential street",
 "missions": [
   {"title": "Turn off idle lights", "description": "Save energy", "points": 20,
    "estimatedTimeSeconds": 60, "type": "energy", "iconName": "Lightbulb"},
   {"title": "Refill your bottle", "points": 15}
 ]}
```"""
        suggestions = parse_suggestions(content)
        assert suggestions.location_context == "A quiet residential street"
        assert [m.title for m in suggestions.missions] == ["Turn off idle lights", "Refill your bottle"]
        assert suggestions.missions[0].estimated_time_seconds == 60
        assert suggestions.missions[0].icon_name == "Lightbulb"
        assert len({m.id for m in suggestions.missions}) == 2

    def test_invalid_items_are_skipped(self):
        content = '[{"title": "Good", "points": 10}, {"points": 5}, {"title": "Bad points", "points": -1}]'
        suggestions = parse_suggestions(content)
        assert [m.title for m in suggestions.missions] == ["Good"]

    def test_not_json(self):
        with pytest.raises(UpstreamException):
            parse_suggestions("Sorry, I can't help with that.")
