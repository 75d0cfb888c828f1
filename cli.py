#!/usr/bin/env python3
"""
CLI for playing Hand Cricket in the terminal
"""
import logging
import random
import time

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich.progress import track

from handcricket.config import settings
from handcricket.database import init_db, SessionLocal
from handcricket.engine import GameSession
from handcricket.engine.errors import MatchError
from handcricket.engine.match_engine import MatchEngine
from handcricket.engine.simulation import HabitualBot, simulate_match
from handcricket.engine.state import (
    BatBowl, Difficulty, Dismissal, MatchResult, Phase, Side, TossChoice,
)
from handcricket.engine.stats_store import StatsStore
from handcricket.engine.achievements import CATALOG_BY_ID

console = Console()

GESTURES = {1: "☝️", 2: "✌️", 3: "🤟", 4: "🖖", 5: "🖐️", 6: "👍"}


def _session() -> GameSession:
    init_db()
    return GameSession(StatsStore(SessionLocal))


@click.group()
@click.option("--verbose", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Hand Cricket - beat the computer at hand cricket"""
    logging.basicConfig(
        level="DEBUG" if verbose else settings.LOG_LEVEL,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@cli.command()
def init():
    """Initialize the database"""
    console.print("[yellow]Initializing database...[/yellow]")
    init_db()
    console.print("[green]Database initialized successfully![/green]")


def _scoreboard(snapshot) -> Panel:
    target = snapshot.target if snapshot.target > 0 else "-"
    batting = "You" if snapshot.batting_side is Side.PLAYER else "Computer"
    table = Table.grid(padding=(0, 3))
    table.add_row("[cyan]You[/cyan]", str(snapshot.player_score))
    table.add_row("[magenta]Computer[/magenta]", str(snapshot.computer_score))
    table.add_row("Target", str(target))
    return Panel(table, title=f"Innings {snapshot.innings} - {batting} batting")


def _announce_unlocked(unlocked: list):
    for aid in unlocked:
        achievement = CATALOG_BY_ID[aid]
        console.print(Panel(
            f"[bold]{achievement.title}[/bold]\n{achievement.description}",
            title="🏆 Achievement Unlocked!",
            style="green",
        ))


@cli.command()
@click.option(
    "--difficulty",
    type=click.Choice([d.value for d in Difficulty]),
    default=None,
    help="Opponent strength",
)
@click.option("--no-delay", is_flag=True, help="Skip the reveal pauses")
def play(difficulty: str, no_delay: bool):
    """Play a match against the computer"""
    game = _session()
    game.reset()

    if difficulty is None:
        difficulty = click.prompt(
            "Choose difficulty",
            type=click.Choice([d.value for d in Difficulty]),
            default=Difficulty.HARD.value,
        )
    step = game.select_difficulty(difficulty)

    # Toss until someone wins it
    while step.snapshot.phase == Phase.TOSS and not step.snapshot.awaiting_bat_bowl:
        choice = click.prompt("Toss", type=click.Choice([c.value for c in TossChoice]))
        step = game.resolve_toss(choice)
        console.print(step.snapshot.message)

    if step.snapshot.awaiting_bat_bowl:
        choice = click.prompt("Bat or bowl?", type=click.Choice([c.value for c in BatBowl]))
        step = game.choose_bat_or_bowl(choice)
        console.print(step.snapshot.message)

    while step.snapshot.phase == Phase.BATTING:
        console.print(_scoreboard(step.snapshot))
        value = click.prompt("Your number (1-6)", type=int)
        try:
            step = game.play_ball(value)
        except MatchError as e:
            console.print(f"[red]{e}[/red]")
            continue

        snapshot = step.snapshot
        console.print(
            f"You {GESTURES[snapshot.last_player_move]} {snapshot.last_player_move}"
            f"  vs  Computer {GESTURES[snapshot.last_computer_move]} {snapshot.last_computer_move}"
        )
        out = any(isinstance(e, Dismissal) for e in step.events)
        console.print(f"[bold red]{snapshot.message}[/bold red]" if out else snapshot.message)
        _announce_unlocked(step.unlocked)

        if not no_delay:
            time.sleep(settings.DISMISSAL_DELAY if out else settings.RUNS_DELAY)
        step = game.complete_resolution()

    snapshot = step.snapshot
    style = {MatchResult.WIN: "green", MatchResult.LOSS: "red", MatchResult.DRAW: "yellow"}[snapshot.result]
    console.print(Panel(
        f"[bold]{snapshot.result_title}[/bold]\n{snapshot.result_message}\n\n"
        f"You {snapshot.player_score}  -  Computer {snapshot.computer_score}",
        title="Match Over",
        style=style,
    ))

    if click.confirm("Hear the commentary?", default=False):
        with console.status("Getting commentary..."):
            commentary = game.commentate()
        console.print(Panel(commentary, title="🎙️ Commentary"))


@cli.command()
def stats():
    """Show career stats and achievements"""
    game = _session()
    s = game.stats

    table = Table(title="Career Stats")
    table.add_column("Stat", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Matches", str(s.matches_played))
    table.add_row("Wins", str(s.wins))
    table.add_row("Losses", str(s.losses))
    table.add_row("Draws", str(s.draws))
    table.add_row("Total Runs", str(s.total_runs))
    table.add_row("Highest Score", str(s.highest_score))
    table.add_row("Wickets", str(s.wickets))
    console.print(table)

    ach_table = Table(title="Achievements")
    ach_table.add_column("", justify="center")
    ach_table.add_column("Title", style="magenta")
    ach_table.add_column("Description")
    for status in game.achievements.statuses():
        ach_table.add_row("🏆" if status.unlocked else "🔒", status.title, status.description)
    console.print(ach_table)


@cli.command()
@click.argument("value", required=False, type=click.Choice(["light", "dark"]))
def theme(value: str):
    """Show the stored theme, or set it"""
    game = _session()
    if value:
        game.set_theme(value)
    console.print(f"Theme: [bold]{game.get_theme()}[/bold]")


@cli.command()
@click.option("--matches", default=500, help="Matches per difficulty")
@click.option("--habit", default=0.5, help="How often the bot plays its favourite number")
@click.option("--seed", default=None, type=int, help="Seed for reproducible runs")
def benchmark(matches: int, habit: float, seed: int):
    """Simulate matches against each difficulty to check the curve"""
    rng = random.Random(seed)

    table = Table(title=f"Bot results over {matches} matches (habit {habit:.0%})")
    table.add_column("Difficulty", style="cyan")
    table.add_column("Win %", justify="right", style="green")
    table.add_column("Loss %", justify="right", style="red")
    table.add_column("Draw %", justify="right")

    for difficulty in Difficulty:
        bot = HabitualBot(rng=random.Random(rng.random()), favourite=rng.randint(1, 6), habit=habit)
        engine = MatchEngine(rng=random.Random(rng.random()))
        counts = {result: 0 for result in MatchResult}
        for _ in track(range(matches), description=f"{difficulty.value}..."):
            result = simulate_match(difficulty, bot, engine)
            if result is not None:
                counts[result] += 1
        total = max(sum(counts.values()), 1)
        table.add_row(
            difficulty.value,
            f"{counts[MatchResult.WIN] / total * 100:.1f}",
            f"{counts[MatchResult.LOSS] / total * 100:.1f}",
            f"{counts[MatchResult.DRAW] / total * 100:.1f}",
        )

    console.print(table)


if __name__ == "__main__":
    cli()
