from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date

import requests
from nba_api.stats.endpoints import scoreboardv2, teamdashboardbygeneralsplits

CDN = "https://cdn.nba.com/static/json/liveData"
BOXSCORE = f"{CDN}/boxscore/boxscore_{{game_id}}.json"
PLAYBYPLAY = f"{CDN}/playbyplay/playbyplay_{{game_id}}.json"

UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/139.0.0.0 Safari/537.36"
)

END_PERIOD = "End Period"
GAME_END = "Game End"
HALFTIME_TEXTS = {"half", "halftime"}

# third digit of a game id
SEASON_TYPES = {
    "1": "Pre Season",
    "2": "Regular Season",
    "3": "All-Star",
    "4": "Playoffs",
    "5": "Play-In",
    "6": "NBA Cup",
}

_CLOCK = re.compile(r"PT(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?")


def http_session() -> requests.Session:
    s = requests.Session()
    s.headers.update({
        "User-Agent": UA,
        "Accept": "application/json, text/plain, */*",
        "Accept-Encoding": "gzip, deflate, br",
        "Referer": "https://www.nba.com/",
        "Origin": "https://www.nba.com",
    })
    return s


def parse_clock(value: str | None) -> str:
    # "PT05M12.00S" -> "5:12"
    if not value:
        return ""
    m = _CLOCK.fullmatch(value)
    if not m:
        return value
    minutes = int(m.group(1) or 0)
    seconds = float(m.group(2) or 0)
    return f"{minutes}:{int(seconds):02d}"


def to_int(value, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass
class Team:
    id: int
    abbr: str
    city: str = ""
    name: str = ""
    record: str = ""
    score: int = 0
    stats: dict = field(default_factory=dict)
    players: list[dict] = field(default_factory=list)
    periods: list[dict] = field(default_factory=list)
    leaders: dict[str, tuple[str, int]] = field(default_factory=dict)

    @property
    def full_name(self) -> str:
        return f"{self.city} {self.name}".strip() or self.abbr

    def update_from_boxscore(self, block: dict) -> None:
        """Copy one side of a CDN box score (homeTeam/awayTeam) onto the team."""
        self.abbr = block.get("teamTricode") or self.abbr
        self.city = block.get("teamCity") or self.city
        self.name = block.get("teamName") or self.name
        self.score = to_int(block.get("score"), self.score)
        self.stats = block.get("statistics") or {}
        self.players = [p for p in (block.get("players") or []) if p.get("played") != "0"]
        self.periods = block.get("periods") or []
        self.leaders = game_leaders(self.players)


@dataclass
class Game:
    id: str
    status: str
    status_text: str
    home: Team
    visitor: Team
    arena: str = ""
    start: str = ""


@dataclass
class Play:
    period: int
    clock: str
    description: str
    home_score: int
    visitor_score: int
    team: str = ""


def game_leaders(players: list[dict]) -> dict[str, tuple[str, int]]:
    out: dict[str, tuple[str, int]] = {}
    for label, key in (("PTS", "points"), ("REB", "reboundsTotal"), ("AST", "assists")):
        best = None
        for p in players:
            val = to_int((p.get("statistics") or {}).get(key))
            if best is None or val > best[1]:
                best = (p.get("name") or p.get("nameI") or "?", val)
        if best is not None:
            out[label] = best
    return out


def is_halftime(status_text: str | None) -> bool:
    return (status_text or "").strip().lower() in HALFTIME_TEXTS


def status_code(status_id, status_text: str | None) -> str:
    # halftime keeps its own code so the live loop can slow down
    if is_halftime(status_text):
        return "Halftime"
    return str(status_id or "")


def season_meta(game_id: str, season: str) -> dict:
    kind = game_id[2:3] if len(game_id) >= 3 else ""
    return {
        "display_year": season,
        "display_season": SEASON_TYPES.get(kind, "Regular Season"),
    }


def fetch_games(day: date) -> list[Game]:
    """Games scheduled on ``day`` from the stats.nba.com scoreboard."""
    sb = scoreboardv2.ScoreboardV2(game_date=day.strftime("%m/%d/%Y"), league_id="00", day_offset=0)
    data = sb.get_normalized_dict()
    headers = data.get("GameHeader", []) or []
    lines = data.get("LineScore", []) or []

    line_index = {}
    for row in lines:
        if row.get("GAME_ID") and row.get("TEAM_ID"):
            line_index[(str(row["GAME_ID"]), int(row["TEAM_ID"]))] = row

    def team(gid: str, team_id: int) -> Team:
        row = line_index.get((gid, team_id), {})
        return Team(
            id=team_id,
            abbr=(row.get("TEAM_ABBREVIATION") or "").strip().upper(),
            city=row.get("TEAM_CITY_NAME") or "",
            name=row.get("TEAM_NAME") or row.get("TEAM_NICKNAME") or "",
            record=row.get("TEAM_WINS_LOSSES") or "",
            score=to_int(row.get("PTS")),
        )

    games: list[Game] = []
    seen = set()
    for h in headers:
        gid = str(h.get("GAME_ID"))
        # ScoreboardV2 can repeat a header row
        if gid in seen:
            continue
        seen.add(gid)
        text = (h.get("GAME_STATUS_TEXT") or "").strip()
        games.append(Game(
            id=gid,
            status=status_code(h.get("GAME_STATUS_ID"), text),
            status_text=text,
            home=team(gid, to_int(h.get("HOME_TEAM_ID"))),
            visitor=team(gid, to_int(h.get("VISITOR_TEAM_ID"))),
            arena=h.get("ARENA_NAME") or "",
            start=h.get("GAME_DATE_EST") or "",
        ))
    return games


def fetch_boxscore(session: requests.Session, game_id: str) -> dict | None:
    """The ``game`` block of the CDN box score, or None before it is published."""
    r = session.get(BOXSCORE.format(game_id=game_id), timeout=15)
    if r.status_code in (403, 404):
        return None
    r.raise_for_status()
    return (r.json() or {}).get("game") or None


def normalize_play(action: dict) -> Play:
    desc = action.get("description") or ""
    if action.get("subType") == "end":
        if action.get("actionType") == "period":
            desc = END_PERIOD
        elif action.get("actionType") == "game":
            desc = GAME_END
    return Play(
        period=to_int(action.get("period")),
        clock=parse_clock(action.get("clock")),
        description=desc,
        home_score=to_int(action.get("scoreHome")),
        visitor_score=to_int(action.get("scoreAway")),
        team=action.get("teamTricode") or "",
    )


def fetch_play_by_play(session: requests.Session, game_id: str) -> list[Play]:
    r = session.get(PLAYBYPLAY.format(game_id=game_id), timeout=15)
    if r.status_code in (403, 404):
        return []
    r.raise_for_status()
    actions = ((r.json() or {}).get("game") or {}).get("actions") or []
    return [normalize_play(a) for a in actions]


def fetch_team_dashboard(team_id: int, season: str) -> dict:
    """Overall season splits for one team (W, L, PTS, FG_PCT, ...)."""
    dash = teamdashboardbygeneralsplits.TeamDashboardByGeneralSplits(team_id=team_id, season=season)
    rows = dash.get_normalized_dict().get("OverallTeamDashboard") or []
    return rows[0] if rows else {}
