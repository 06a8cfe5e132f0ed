"""Shared pytest fixtures: canned NBA payloads and a fake HTTP session."""

from __future__ import annotations

import pytest
import requests
from rich.console import Console

from hoopbug.api import Game, Team


class FakeResponse:
    def __init__(self, payload=None, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Routes GETs by URL substring; each route is a list of responses served in order."""

    def __init__(self, routes: dict):
        self.routes = {k: list(v) for k, v in routes.items()}
        self.calls: list[str] = []

    def get(self, url, **kwargs):
        self.calls.append(url)
        for key, responses in self.routes.items():
            if key in url:
                return responses.pop(0) if len(responses) > 1 else responses[0]
        raise AssertionError(f"unexpected url {url}")


def player(name, name_i, points, rebounds, assists, **extra):
    stats = {
        "minutes": "PT30M15.00S",
        "points": points,
        "reboundsTotal": rebounds,
        "reboundsOffensive": 1,
        "reboundsDefensive": rebounds - 1,
        "assists": assists,
        "fieldGoalsMade": 5,
        "fieldGoalsAttempted": 10,
        "threePointersMade": 1,
        "threePointersAttempted": 4,
        "freeThrowsMade": 2,
        "freeThrowsAttempted": 2,
        "steals": 1,
        "blocks": 0,
        "turnovers": 2,
        "foulsPersonal": 3,
        "plusMinusPoints": 4.0,
    }
    return {"name": name, "nameI": name_i, "position": "G", "played": "1",
            "oncourt": "1", "statistics": stats, **extra}


@pytest.fixture
def boxscore_game():
    return {
        "gameId": "0022300555",
        "gameStatus": 2,
        "gameStatusText": "Q3 5:12",
        "period": 3,
        "gameClock": "PT05M12.00S",
        "gameTimeLocal": "2024-01-15T19:30:00-05:00",
        "arena": {"arenaName": "TD Garden", "arenaCity": "Boston", "arenaState": "MA"},
        "homeTeam": {
            "teamId": 1610612738,
            "teamTricode": "BOS",
            "teamCity": "Boston",
            "teamName": "Celtics",
            "score": 80,
            "periods": [{"period": 1, "score": 28}, {"period": 2, "score": 30}, {"period": 3, "score": 22}],
            "statistics": {"points": 80, "fieldGoalsPercentage": 0.478},
            "players": [
                player("Jayson Tatum", "J. Tatum", 25, 8, 4),
                player("Jaylen Brown", "J. Brown", 18, 5, 6),
                {"name": "Bench Guy", "nameI": "B. Guy", "played": "0", "statistics": {}},
            ],
        },
        "awayTeam": {
            "teamId": 1610612747,
            "teamTricode": "LAL",
            "teamCity": "Los Angeles",
            "teamName": "Lakers",
            "score": 75,
            "periods": [{"period": 1, "score": 25}, {"period": 2, "score": 27}, {"period": 3, "score": 23}],
            "statistics": {"points": 75},
            "players": [
                player("LeBron James", "L. James", 22, 7, 9),
                player("Anthony Davis", "A. Davis", 20, 12, 2),
            ],
        },
    }


@pytest.fixture
def actions():
    return [
        {"actionNumber": 1, "period": 1, "clock": "PT12M00.00S", "actionType": "period",
         "subType": "start", "description": "Period Start", "scoreHome": "0", "scoreAway": "0"},
        {"actionNumber": 2, "period": 1, "clock": "PT11M41.00S", "actionType": "2pt",
         "teamTricode": "BOS", "description": "Tatum 2' Layup (2 PTS)", "scoreHome": "2", "scoreAway": "0"},
        {"actionNumber": 3, "period": 1, "clock": "PT11M20.00S", "actionType": "rebound",
         "teamTricode": "LAL", "description": "Davis REBOUND (Off:0 Def:1)", "scoreHome": "2", "scoreAway": "0"},
    ]


@pytest.fixture
def game():
    return Game(
        id="0022300555",
        status="2",
        status_text="Q3 5:12",
        home=Team(id=1610612738, abbr="BOS", city="Boston", name="Celtics", record="30-9"),
        visitor=Team(id=1610612747, abbr="LAL", city="Los Angeles", name="Lakers", record="21-20"),
        arena="TD Garden",
        start="2024-01-15T00:00:00",
    )


@pytest.fixture
def console():
    return Console(record=True, width=160, color_system=None, force_terminal=False)
