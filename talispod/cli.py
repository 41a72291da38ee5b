"""Command line front end.

  talispod species
  talispod area T H L
  talispod rank SPECIES T H L [--hour H]

SPECIES accepts a catalog id or a display name ("Wind Dragon").
  talispod grow SPECIES T H L --minutes N [--hour H]
  talispod battle SPECIES ENEMY [--seed S]
"""
from __future__ import annotations
import argparse
import random
from datetime import datetime
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.box import ROUNDED

from talispod.battle.core import BattleCore
from talispod.battle.session import BattleController, PLAYER_WIN
from talispod.core.errors import TalisPodError
from talispod.core.types import STAT_AXES, attribute_abbreviation, rich_attribute
from talispod.creature.factory import new_creature
from talispod.data.areas import area_name
from talispod.data.loader import all_species_ids, find_by_name
from talispod.environment.rank import EnvironmentSample, derived_best_area, evaluate_rank, preview_attribute
from talispod.environment.resolver import resolve_area
from talispod.growth.engine import GrowthEngine
from talispod.system.settings import Settings

console = Console()

def _at_hour(hour: Optional[int]) -> datetime:
    now = datetime.now()
    return now if hour is None else now.replace(hour=hour % 24, minute=0, second=0, microsecond=0)

def _creature(name: str):
    sp = find_by_name(name)
    return new_creature(sp.id if sp else name)

def _attr_label(attribute) -> str:
    return rich_attribute(attribute, attribute_abbreviation(attribute)) if attribute else "-"

def _stat_table(creature, title: str) -> Table:
    table = Table(title=title, box=ROUNDED)
    table.add_column("Stat", style="bright_white")
    table.add_column("Base", justify="right")
    table.add_column("Grown", justify="right")
    table.add_column("Cap", justify="right", style="dim")
    table.add_row("HP", str(creature.base_hp), str(creature.grown_hp), str(creature.max_grow_hp))
    for axis in STAT_AXES:
        table.add_row(axis, str(creature.base_stats[axis]), str(creature.grown_stats[axis]),
                      str(creature.max_grow_stats[axis]))
    return table

def cmd_species(args) -> int:
    table = Table(title="Species", box=ROUNDED)
    table.add_column("ID", style="bright_white")
    table.add_column("Name")
    table.add_column("Attr", justify="center")
    table.add_column("Weak", justify="center")
    table.add_column("Best area")
    for species_id in all_species_ids():
        creature = new_creature(species_id)
        best = derived_best_area(creature)
        table.add_row(species_id, creature.name, _attr_label(creature.attribute),
                      _attr_label(creature.weak_attribute), f"{best} ({area_name(best)})" if best else "-")
    console.print(table)
    return 0

def cmd_area(args) -> int:
    area_id = resolve_area(args.temperature, args.humidity, args.third)
    attr = preview_attribute(EnvironmentSample(args.temperature, args.humidity, args.third))
    console.print(f"{area_id}  {area_name(area_id)}  {rich_attribute(attr)}")
    return 0

def cmd_rank(args) -> int:
    creature = _creature(args.species)
    res = evaluate_rank(creature, EnvironmentSample(args.temperature, args.humidity, args.third), _at_hour(args.hour))
    table = Table(box=ROUNDED, show_header=False)
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("Creature", creature.display_name)
    table.add_row("Area", f"{res.area_id} ({res.area_name})")
    table.add_row("Attribute", rich_attribute(res.area_attribute))
    table.add_row("Rank", f"[bold]{res.rank.value}[/bold]")
    if not res.is_sea:
        table.add_row("Light", f"target {res.light_target}" + ("" if res.light_ok else " [red](mismatch)[/red]"))
    console.print(table)
    return 0

def cmd_grow(args) -> int:
    creature = _creature(args.species)
    sample = EnvironmentSample(args.temperature, args.humidity, args.third)
    moment = _at_hour(args.hour)
    engine = GrowthEngine(creature, lambda: sample, clock=lambda: moment)
    results = engine.accumulate(args.minutes * engine.tick_seconds)
    rank = results[0].rank.value if results else "neutral"
    console.print(f"{len(results)} tick(s) at rank [bold]{rank}[/bold]")
    console.print(_stat_table(creature, f"{creature.display_name}  HP {creature.current_hp}/{creature.max_hp}"))
    return 0

def cmd_battle(args) -> int:
    settings = Settings.load()
    seed = args.seed if args.seed is not None else settings.data.seed
    creature = _creature(args.species)
    ctl = BattleController(BattleCore(random.Random(seed)), rounds=settings.data.rounds,
                           selection_seconds=settings.data.selection_seconds)
    ctl.start(creature, args.enemy)
    enemy = ctl.enemy_species
    ctl.run_auto()
    log = list(ctl.log)
    result = ctl.close()
    console.print(Panel("\n".join(log), title=f"{creature.display_name} vs {enemy.name}", box=ROUNDED))
    color = "green" if result["outcome"] == PLAYER_WIN else "red"
    table = Table(box=ROUNDED, show_header=False)
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("Outcome", f"[{color}]{result['outcome']}[/{color}]")
    table.add_row("Rounds", str(result["rounds"]))
    table.add_row("HP", f"{creature.current_hp}/{creature.max_hp}")
    table.add_row("Rewards", ", ".join(r.name for r in result["rewards"]) or "-")
    console.print(table)
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="talispod", description="TalisPod environment and battle simulator")
    sub = parser.add_subparsers(dest="command", required=True)

    def env_args(p):
        p.add_argument("temperature", type=float)
        p.add_argument("humidity", type=float)
        p.add_argument("third", type=float, metavar="light_or_depth")

    p = sub.add_parser("species", help="List the species catalog")
    p.set_defaults(func=cmd_species)

    p = sub.add_parser("area", help="Resolve an environment to its area")
    env_args(p)
    p.set_defaults(func=cmd_area)

    p = sub.add_parser("rank", help="Rank an environment for a species")
    p.add_argument("species")
    env_args(p)
    p.add_argument("--hour", type=int, default=None)
    p.set_defaults(func=cmd_rank)

    p = sub.add_parser("grow", help="Simulate growth ticks")
    p.add_argument("species")
    env_args(p)
    p.add_argument("--minutes", type=int, default=1)
    p.add_argument("--hour", type=int, default=None)
    p.set_defaults(func=cmd_grow)

    p = sub.add_parser("battle", help="Auto-play a battle")
    p.add_argument("species")
    p.add_argument("enemy")
    p.add_argument("--seed", type=int, default=None)
    p.set_defaults(func=cmd_battle)
    return parser

def run(argv: Optional[List[str]] = None) -> int:
    settings = Settings.load()
    settings.apply_logging()
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except TalisPodError as e:
        console.print(f"[red]error:[/red] {e}")
        return 1

if __name__ == "__main__":
    raise SystemExit(run())
