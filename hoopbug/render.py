from __future__ import annotations

from datetime import date, datetime

from rich import box
from rich.console import Console, Group
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .api import Play, Team, is_halftime, parse_clock, to_int

HOME_STYLE = "magenta"
VISITOR_STYLE = "cyan"

# (label, dashboard column, lower is better)
PREVIEW_ROWS = [
    ("PTS", "PTS", False),
    ("FG%", "FG_PCT", False),
    ("3P%", "FG3_PCT", False),
    ("FT%", "FT_PCT", False),
    ("OREB", "OREB", False),
    ("DREB", "DREB", False),
    ("REB", "REB", False),
    ("AST", "AST", False),
    ("STL", "STL", False),
    ("BLK", "BLK", False),
    ("TOV", "TOV", True),
    ("+/-", "PLUS_MINUS", False),
]


def period_label(period: int) -> str:
    return f"Q{period}" if period <= 4 else f"OT{period - 4}"


def pct(value) -> str:
    if value is None or value == "":
        return "-"
    return f"{float(value) * 100:.1f}"


def fmt_start(game_box: dict | None, fallback: str = "") -> str:
    raw = (game_box or {}).get("gameTimeLocal") or (game_box or {}).get("gameEt") or fallback
    if not raw:
        return ""
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).strftime("%Y/%m/%d %H:%M")
    except ValueError:
        return raw


def fmt_arena(game_box: dict | None, fallback: str = "") -> str:
    arena = (game_box or {}).get("arena") or {}
    name = arena.get("arenaName") or fallback
    where = ", ".join(x for x in (arena.get("arenaCity"), arena.get("arenaState")) if x)
    return f"{name} | {where}" if where else name


def date_banner(console: Console, day: date) -> None:
    console.print(Panel(
        Text(day.strftime("%Y/%m/%d"), style="bold bright_white", justify="center"),
        box=box.DOUBLE,
        border_style="bright_yellow",
        expand=False,
        padding=(1, 6),
    ))


def matchup_header(home: Team, visitor: Team, meta: dict, when: str, arena: str) -> Panel:
    lines = Text()
    lines.append(f"{meta.get('display_year', '')} {meta.get('display_season', '')}\n", style="bold")
    lines.append(visitor.full_name, style=f"bold {VISITOR_STYLE}")
    if visitor.record:
        lines.append(f" ({visitor.record})", style="dim")
    lines.append("  @  ")
    lines.append(home.full_name, style=f"bold {HOME_STYLE}")
    if home.record:
        lines.append(f" ({home.record})", style="dim")
    if when:
        lines.append(f"\n📅  {when}")
    if arena:
        lines.append(f"\n🏠  {arena}")
    return Panel(lines, box=box.ROUNDED, expand=False)


# --- preview -----------------------------------------------------------------

def preview_table(home: Team, visitor: Team, home_dash: dict, visitor_dash: dict) -> Table:
    table = Table(title="Season Splits", box=box.SIMPLE_HEAVY)
    table.add_column(visitor.abbr or "AWY", justify="right", style=VISITOR_STYLE)
    table.add_column("", justify="center", style="bold")
    table.add_column(home.abbr or "HME", justify="left", style=HOME_STYLE)

    def record(d: dict) -> str:
        if not d:
            return "-"
        return f"{to_int(d.get('W'))}-{to_int(d.get('L'))}"

    table.add_row(record(visitor_dash), "W-L", record(home_dash))
    for label, key, lower_better in PREVIEW_ROWS:
        v = visitor_dash.get(key)
        h = home_dash.get(key)
        if key.endswith("_PCT"):
            vs, hs = pct(v), pct(h)
        else:
            vs = "-" if v is None else f"{v}"
            hs = "-" if h is None else f"{h}"
        if v is not None and h is not None and v != h:
            visitor_better = (v < h) if lower_better else (v > h)
            if visitor_better:
                vs = f"[bold green]{vs}[/bold green]"
            else:
                hs = f"[bold green]{hs}[/bold green]"
        table.add_row(vs, label, hs)
    return table


def preview(console: Console, home: Team, visitor: Team, meta: dict, home_dash: dict,
            visitor_dash: dict, game_box: dict | None = None, arena: str = "", start: str = "") -> None:
    console.print(matchup_header(home, visitor, meta, fmt_start(game_box, start), fmt_arena(game_box, arena)))
    console.print(preview_table(home, visitor, home_dash, visitor_dash))


# --- scoreboard / box score --------------------------------------------------

def line_score_table(home: Team, visitor: Team) -> Table:
    count = max(4, len(home.periods), len(visitor.periods))
    table = Table(box=box.SIMPLE, show_edge=False)
    table.add_column("Team", style="bold")
    for n in range(1, count + 1):
        table.add_column(period_label(n), justify="right")
    table.add_column("T", justify="right", style="bold")

    for team, style in ((visitor, VISITOR_STYLE), (home, HOME_STYLE)):
        by_period = {to_int(p.get("period")): p.get("score") for p in team.periods}
        cells = ["-" if by_period.get(n) is None else str(by_period[n]) for n in range(1, count + 1)]
        table.add_row(Text(team.abbr, style=style), *cells, str(team.score))
    return table


def scoreboard(console: Console, home: Team, visitor: Team, meta: dict, game_box: dict | None) -> None:
    console.print(matchup_header(home, visitor, meta, fmt_start(game_box), fmt_arena(game_box)))
    status = (game_box or {}).get("gameStatusText") or "Final"
    winner = home if home.score > visitor.score else visitor
    style = HOME_STYLE if winner is home else VISITOR_STYLE
    console.print(Text.assemble(
        (f"{visitor.abbr} {visitor.score}", VISITOR_STYLE), "  -  ",
        (f"{home.score} {home.abbr}", HOME_STYLE), f"   [{status}]  ",
        (f"{winner.abbr} wins", f"bold {style}"),
    ))
    console.print(line_score_table(home, visitor))
    if home.leaders or visitor.leaders:
        console.print(leaders_table(home, visitor))


def leaders_table(home: Team, visitor: Team) -> Table:
    table = Table(title="Game Leaders", box=box.SIMPLE, expand=False)
    table.add_column("", style="bold")
    table.add_column(visitor.abbr, style=VISITOR_STYLE)
    table.add_column(home.abbr, style=HOME_STYLE)
    for cat in ("PTS", "REB", "AST"):
        cells = []
        for team in (visitor, home):
            name, val = team.leaders.get(cat, ("-", None))
            cells.append(name if val is None else f"{name} ({val})")
        table.add_row(cat, *cells)
    return table


def _made(stats: dict, made: str, att: str) -> str:
    return f"{to_int(stats.get(made))}-{to_int(stats.get(att))}"


def _stat_cells(s: dict) -> list[str]:
    return [
        _made(s, "fieldGoalsMade", "fieldGoalsAttempted"),
        _made(s, "threePointersMade", "threePointersAttempted"),
        _made(s, "freeThrowsMade", "freeThrowsAttempted"),
        str(to_int(s.get("reboundsOffensive"))),
        str(to_int(s.get("reboundsDefensive"))),
        str(to_int(s.get("reboundsTotal"))),
        str(to_int(s.get("assists"))),
        str(to_int(s.get("steals"))),
        str(to_int(s.get("blocks"))),
        str(to_int(s.get("turnovers", s.get("turnoversTotal")))),
        str(to_int(s.get("foulsPersonal"))),
    ]


def box_score_table(team: Team, style: str = "white", compact: bool = False) -> Table:
    table = Table(title=team.full_name, title_style=f"bold {style}", box=box.SIMPLE_HEAD, expand=compact)
    table.add_column("Player", style=style, no_wrap=True)
    if compact:
        for col in ("MIN", "FG", "REB", "AST", "PTS"):
            table.add_column(col, justify="right")
    else:
        for col in ("POS", "MIN", "FG", "3PT", "FT", "OREB", "DREB", "REB",
                    "AST", "STL", "BLK", "TO", "PF", "+/-", "PTS"):
            table.add_column(col, justify="right")

    for p in team.players:
        s = p.get("statistics") or {}
        name = p.get("nameI") or p.get("name") or "?"
        if p.get("oncourt") == "1" and compact:
            name = f"● {name}"
        mins = parse_clock(s.get("minutes")) or "0:00"
        pts = str(to_int(s.get("points")))
        if compact:
            table.add_row(name, mins, _made(s, "fieldGoalsMade", "fieldGoalsAttempted"),
                          str(to_int(s.get("reboundsTotal"))), str(to_int(s.get("assists"))), pts)
            continue
        pm = to_int(s.get("plusMinusPoints"))
        table.add_row(name, p.get("position") or "", mins, *_stat_cells(s),
                      f"{pm:+d}" if pm else "0", pts)

    if not compact and team.stats:
        s = team.stats
        table.add_row("Totals", "", "", *_stat_cells(s), "", str(to_int(s.get("points"))), style="bold")
        table.add_row("", "", "",
                      pct(s.get("fieldGoalsPercentage")),
                      pct(s.get("threePointersPercentage")),
                      pct(s.get("freeThrowsPercentage")),
                      *[""] * 10, style="dim")
    return table


def box_score(console: Console, home: Team, visitor: Team) -> None:
    console.print(box_score_table(visitor, VISITOR_STYLE))
    console.print(box_score_table(home, HOME_STYLE))


# --- live dashboard ----------------------------------------------------------

def game_clock(game_box: dict | None, plays: list[Play], is_final: bool) -> str:
    last = plays[-1] if plays else None
    period = last.period if last else to_int((game_box or {}).get("period"))
    if is_final:
        return "Final" if period <= 4 else f"Final/{period_label(period)}"
    status = ((game_box or {}).get("gameStatusText") or "").strip()
    if is_halftime(status):
        return "Halftime"
    clock = parse_clock((game_box or {}).get("gameClock")) or (last.clock if last else "")
    if not period:
        return status
    return f"{period_label(period)} {clock}".strip()


def play_feed(plays: list[Play], limit: int = 20) -> Table:
    table = Table(box=None, show_header=False, expand=True, pad_edge=False)
    table.add_column("when", style="dim", no_wrap=True)
    table.add_column("team", no_wrap=True)
    table.add_column("play")
    table.add_column("score", justify="right", no_wrap=True)
    prev = None
    rows = []
    # newest first, scoring plays highlighted
    for p in plays:
        scored = prev is not None and (p.home_score, p.visitor_score) != prev
        prev = (p.home_score, p.visitor_score)
        rows.append((p, scored))
    for p, scored in reversed(rows[-limit:]):
        desc = Text(p.description, style="bold green" if scored else "")
        table.add_row(f"{period_label(p.period)} {p.clock}", p.team,
                      desc, f"{p.visitor_score}-{p.home_score}")
    return table


def build_dashboard(home: Team, visitor: Team, plays: list[Play], game_box: dict | None,
                    meta: dict, is_final: bool, limit: int = 20) -> Layout:
    header = Text.assemble(
        (f"{meta.get('display_year', '')} {meta.get('display_season', '')}", "bold"),
        "    📅  ", fmt_start(game_box),
        "    🏠  ", fmt_arena(game_box),
    )
    score = Text.assemble(
        (f" {visitor.abbr} ", f"bold {VISITOR_STYLE}"), (f"{visitor.score}", "bold"),
        "  -  ",
        (f"{home.score}", "bold"), (f" {home.abbr} ", f"bold {HOME_STYLE}"),
        "    ", (game_clock(game_box, plays, is_final), "bold yellow"),
        justify="center",
    )

    layout = Layout()
    layout.split_column(
        Layout(Panel(header, box=box.ROUNDED), name="header", size=3),
        Layout(Panel(Group(score, line_score_table(home, visitor)), box=box.DOUBLE,
                     border_style="bright_yellow"), name="scoreboard", size=9),
        Layout(name="body"),
    )
    layout["body"].split_row(
        Layout(Panel(play_feed(plays, limit), title="Play-by-Play", border_style="green"),
               name="plays", ratio=3),
        Layout(Panel(Group(box_score_table(visitor, VISITOR_STYLE, compact=True),
                           box_score_table(home, HOME_STYLE, compact=True)),
                     title="Box Score", border_style="blue"), name="box", ratio=2),
    )
    return layout
