from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table

from .api import Game


def games_table(games: list[Game]) -> Table:
    table = Table(title="Games", box=box.ROUNDED)
    table.add_column("#", style="cyan", width=3)
    table.add_column("Matchup", style="white")
    table.add_column("Score", style="green")
    table.add_column("Status", style="yellow")
    for i, g in enumerate(games, start=1):
        score = "-" if g.status == "1" else f"{g.visitor.score}-{g.home.score}"
        table.add_row(str(i), f"{g.visitor.abbr} @ {g.home.abbr}", score, g.status_text)
    return table


def choose_game(games: list[Game], console: Console, ask=input) -> Game:
    if not games:
        raise SystemExit("No games scheduled on that date")
    if len(games) == 1:
        return games[0]

    console.print(games_table(games))
    while True:
        try:
            choice = ask(f"Select [1-{len(games)}]: ").strip()
        except EOFError:
            choice = "1"
        if not choice:
            choice = "1"
        if choice.isdecimal() and 1 <= int(choice) <= len(games):
            return games[int(choice) - 1]
        console.print("[red]Invalid selection.[/red]")
