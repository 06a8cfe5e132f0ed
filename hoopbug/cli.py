#!/usr/bin/env python3
"""
hoopbug: Follow any NBA game in your shell.

- Resolves a date (--date, --today, --tomorrow, --yesterday)
- Picks a game on that date (prompts when there are several)
- Pregame: season splits preview
- Live: play-by-play dashboard, redrawn every few seconds
- Final: scoreboard + box score

Note: Uses stats.nba.com (via nba_api) for schedule and team splits,
and the cdn.nba.com liveData feeds for box score and play-by-play.
"""

from __future__ import annotations
import argparse, os, sys
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as dateparser
from rich.console import Console

from . import api, live, render
from .schedule import choose_game

CONFIG_PATH = "~/.hoopbug/config.toml"
EARLIEST = date(2012, 6, 1)

# --- tiny helpers -------------------------------------------------------------

def colorize(enabled: bool, s: str, fg: str = "37") -> str:
    # cheap ANSI: fg expects '31'..'37'
    if not enabled:
        return s
    return f"\x1b[{fg}m{s}\x1b[0m"

def warn(msg: str, color: bool = True):
    print(colorize(color, f"⚠ {msg}", "33"), file=sys.stderr)

def error(msg: str, color: bool = True):
    print(colorize(color, f"✖ {msg}", "31"), file=sys.stderr)

def local_tz_key(default: str = "America/New_York") -> str:
    try:
        tzinfo = datetime.now().astimezone().tzinfo
        key = getattr(tzinfo, "key", None)
        if isinstance(key, str) and key:
            return key
    except Exception:
        pass
    return default

def load_config(path: str = CONFIG_PATH) -> dict:
    path = os.path.expanduser(path)
    if not os.path.exists(path):
        return {}
    import tomllib
    try:
        with open(path, "rb") as f:
            return tomllib.load(f) or {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        warn(f"ignoring {path}: {e}")
        return {}

# --- dates -------------------------------------------------------------------

def resolve_date(args: argparse.Namespace, today: date) -> date:
    if args.date:
        try:
            return dateparser.parse(args.date).date()
        except (ValueError, OverflowError):
            raise SystemExit("Date is invalid")
    if args.today:
        return today
    if args.tomorrow:
        return today + timedelta(days=1)
    if args.yesterday:
        return today - timedelta(days=1)
    raise SystemExit("Can't find any option: use --date, --today, --tomorrow or --yesterday")

def season_for(day: date) -> str:
    # stats.nba.com has nothing before 2012-13
    if day < EARLIEST:
        raise SystemExit("Sorry, stats.nba.com doesn't provide season data before 2012-13")
    start = day.year if day.month >= 10 else day.year - 1
    return f"{start}-{str(start + 1)[-2:]}"

# --- views -------------------------------------------------------------------

def show_preview(game: api.Game, meta: dict, season: str, game_box: dict | None, console: Console):
    with console.status("Loading Game Preview"):
        home_dash = api.fetch_team_dashboard(game.home.id, season)
        visitor_dash = api.fetch_team_dashboard(game.visitor.id, season)
    render.preview(console, game.home, game.visitor, meta, home_dash, visitor_dash,
                   game_box, arena=game.arena, start=game.start)

def show_final(game: api.Game, meta: dict, game_box: dict | None, console: Console):
    render.scoreboard(console, game.home, game.visitor, meta, game_box)
    console.print()
    render.box_score(console, game.home, game.visitor)

def dispatch(game: api.Game, season: str, session, console: Console, args: argparse.Namespace):
    meta = api.season_meta(game.id, season)
    game_box = api.fetch_boxscore(session, game.id)
    if game_box:
        game.home.update_from_boxscore(game_box.get("homeTeam") or {})
        game.visitor.update_from_boxscore(game_box.get("awayTeam") or {})

    status = game.status
    if status == "1":
        show_preview(game, meta, season, game_box, console)
    elif status in ("2", "Halftime"):
        try:
            live.follow(session, game, meta, console, interval=args.interval,
                        halftime_interval=args.halftime_interval, limit=args.plays)
        except KeyboardInterrupt:
            console.print("\nBye.")
    else:
        if not game_box:
            warn("box score not published yet", not args.no_color)
        show_final(game, meta, game_box, console)

# --- cli ---------------------------------------------------------------------

def build_parser(cfg: dict) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="hoopbug", description="Follow an NBA game in your terminal")
    when = ap.add_mutually_exclusive_group()
    when.add_argument("--date", help="Game date (e.g. 2024-01-15, 2024/01/15, 'Jan 15 2024')")
    when.add_argument("--today", action="store_true", help="Today's games")
    when.add_argument("--tomorrow", action="store_true", help="Tomorrow's games")
    when.add_argument("--yesterday", action="store_true", help="Yesterday's games")
    ap.add_argument("--tz", default=cfg.get("tz"), help="IANA timezone for 'today'. Defaults to local")
    ap.add_argument("--no-color", action="store_true", default=bool(cfg.get("no_color", False)), help="Disable color")
    ap.add_argument("--interval", type=float, default=cfg.get("interval", live.INTERVAL), help="Live poll seconds (default 3)")
    ap.add_argument("--halftime-interval", type=float, default=cfg.get("halftime_interval", live.HALFTIME_INTERVAL), help="Poll seconds at halftime (default 15)")
    ap.add_argument("--plays", type=int, default=cfg.get("plays", 20), help="Play-by-play rows on the live dashboard")
    return ap

def run(argv: list[str] | None = None):
    cfg = load_config()
    args = build_parser(cfg).parse_args(argv)
    color = not args.no_color
    try:
        tz_key = args.tz or local_tz_key()
        try:
            today = datetime.now(ZoneInfo(tz_key)).date()
        except (ZoneInfoNotFoundError, ValueError):
            raise SystemExit(f"Unknown timezone: {tz_key}")
        day = resolve_date(args, today)
        season = season_for(day)

        console = Console(no_color=not color, highlight=False)
        render.date_banner(console, day)

        games = api.fetch_games(day)
        game = choose_game(games, console)
        dispatch(game, season, api.http_session(), console, args)
    except SystemExit as e:
        if isinstance(e.code, str):
            error(e.code, color)
            raise SystemExit(1)
        raise

def main():
    run()

if __name__ == "__main__":
    main()
