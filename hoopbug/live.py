from __future__ import annotations

import time

import requests
from rich.console import Console
from rich.live import Live

from . import api
from .api import END_PERIOD, GAME_END, Game, Play, is_halftime
from .render import build_dashboard

INTERVAL = 3.0
HALFTIME_INTERVAL = 15.0


def is_final(last_play: Play | None) -> bool:
    """True once regulation (or an overtime) has ended with a winner."""
    if last_play is None:
        return False
    return (
        last_play.period >= 4
        and last_play.description == END_PERIOD
        and last_play.home_score != last_play.visitor_score
    )


def last_play(plays: list[Play]) -> Play | None:
    # the feed closes a finished game with a "Game End" action after the last period end
    for p in reversed(plays):
        if p.description != GAME_END:
            return p
    return None


def poll_interval(status_text: str | None, interval: float = INTERVAL,
                  halftime_interval: float = HALFTIME_INTERVAL) -> float:
    if is_halftime(status_text):
        return halftime_interval
    return interval


def follow(session: requests.Session, game: Game, meta: dict, console: Console,
           interval: float = INTERVAL, halftime_interval: float = HALFTIME_INTERVAL,
           limit: int = 20) -> None:
    """Poll play-by-play and box score and redraw the dashboard until the game ends."""
    home, visitor = game.home, game.visitor
    status_text = game.status_text
    with Live(console=console, screen=False, auto_refresh=False) as live:
        while True:
            plays = api.fetch_play_by_play(session, game.id)
            game_box = api.fetch_boxscore(session, game.id)
            if game_box:
                home.update_from_boxscore(game_box.get("homeTeam") or {})
                visitor.update_from_boxscore(game_box.get("awayTeam") or {})
                status_text = game_box.get("gameStatusText") or status_text

            last = last_play(plays)
            if last is not None:
                home.score = last.home_score
                visitor.score = last.visitor_score
            done = is_final(last)

            live.update(build_dashboard(home, visitor, plays, game_box, meta, done, limit), refresh=True)
            if done:
                break

            time.sleep(poll_interval(status_text, interval, halftime_interval))
