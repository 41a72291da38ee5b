"""Round-based battle orchestration.

``BattleController`` is an explicit state machine (intro -> selection ->
execution -> ... -> result). Nothing here waits on a clock: callers drive it
with ``advance()`` for phase steps and ``tick(seconds)`` for the selection
countdown, so a UI loop and a unit test drive it the same way.

Each execution pair resolves in four steps: player reveal, enemy reveal,
player action, enemy action. The enemy acts only while both sides stand, and
a pair is never started once either side is down.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Literal, Optional, Tuple, TypedDict

from talispod.core.errors import BattleStateError
from talispod.core.logging import logger
from talispod.core.types import TORNADO
from talispod.creature.models import Creature
from talispod.data.enemies import EnemySpecies, RewardEntry, get_enemy
from talispod.data.skills import Skill, resolve_skill
from .core import BattleCore, Combatant, MOVES_PER_ROUND, is_reflected
from .factory import combatant_from_creature, combatant_from_enemy

DEFAULT_ROUNDS = 5
DEFAULT_SELECTION_SECONDS = 30.0
DEFEAT_HP_PERCENT = 20

PLAYER = "player"
ENEMY = "enemy"
PLAYER_WIN = "PLAYER_WIN"
PLAYER_LOSS = "PLAYER_LOSS"

class Phase(str, Enum):
    INTRO = "intro"
    SELECTION = "selection"
    EXECUTION = "execution"
    RESULT = "result"

EventKind = Literal["intro", "reveal", "heal", "brace", "strike", "reflect", "hold", "skip", "round_end", "result"]

@dataclass(frozen=True)
class BattleEvent:
    kind: EventKind
    round: int
    pair: Optional[int] = None
    actor: Optional[str] = None
    skill_id: Optional[str] = None
    amount: int = 0
    player_hp: int = 0
    enemy_hp: int = 0

@dataclass(frozen=True)
class SideView:
    name: str
    attribute: Optional[str]
    hp: int
    max_hp: int
    bracing: bool
    moves: Tuple[Optional[str], ...]

@dataclass(frozen=True)
class BattleSnapshot:
    phase: Optional[Phase]
    round: int
    rounds: int
    time_left: float
    player: Optional[SideView]
    enemy: Optional[SideView]
    selection: Tuple[int, ...]
    enemy_selection: Tuple[int, ...]
    spent: Tuple[int, ...]
    available: Tuple[int, ...]
    outcome: Optional[str]
    rewards: Tuple[str, ...]
    log: Tuple[str, ...]

class BattleResult(TypedDict):
    outcome: Literal["PLAYER_WIN", "PLAYER_LOSS"]
    enemy_id: str
    rounds: int
    player_hp: int
    rewards: List[RewardEntry]

def _view(side: Combatant) -> SideView:
    return SideView(side.name, side.attribute, side.hp, side.max_hp, side.bracing, tuple(side.moves))

class BattleController:
    def __init__(self, core: Optional[BattleCore] = None, *, rounds: int = DEFAULT_ROUNDS,
                 selection_seconds: float = DEFAULT_SELECTION_SECONDS):
        self.core = core or BattleCore()
        self.rounds = rounds
        self.selection_seconds = float(selection_seconds)
        self.log: List[str] = []
        self.core.message_cb = self.log.append
        self._reset()

    def _reset(self):
        self.creature: Optional[Creature] = None
        self.enemy_species: Optional[EnemySpecies] = None
        self.player: Optional[Combatant] = None
        self.enemy: Optional[Combatant] = None
        self.phase: Optional[Phase] = None
        self.round = 0
        self.time_left = 0.0
        self.selection: List[int] = []
        self.enemy_selection: List[int] = []
        self.spent: List[int] = []
        self.rewards: List[RewardEntry] = []
        self.outcome: Optional[str] = None
        self._pair = 0
        self._step = 0
        self._skills: Optional[Tuple[Skill, Skill]] = None

    @property
    def active(self) -> bool:
        return self.phase is not None

    def _require(self, phase: Phase, op: str):
        if self.phase is not phase:
            state = self.phase.value if self.phase else "idle"
            raise BattleStateError(f"{op} not allowed while {state}")

    # ---------------- Lifecycle -----------------
    def start(self, creature: Creature, enemy_id: Optional[str]) -> BattleSnapshot:
        if self.active:
            raise BattleStateError("a battle is already in progress")
        enemy = get_enemy(enemy_id)
        self._reset()
        self.log.clear()
        self.creature = creature
        self.enemy_species = enemy
        self.player = combatant_from_creature(creature)
        self.enemy = combatant_from_enemy(enemy)
        self.phase = Phase.INTRO
        self.log.append(f"A wild {enemy.name} appeared!")
        logger.info("BattleStart", creature=creature.species_id, enemy=enemy.id,
                    player_hp=self.player.hp, enemy_hp=self.enemy.hp)
        return self.snapshot()

    def close(self) -> BattleResult:
        """Write HP back to the creature and tear the session down."""
        if not self.active:
            raise BattleStateError("no battle to close")
        self._require(Phase.RESULT, "close")
        creature = self.creature
        if self.outcome == PLAYER_LOSS:
            creature.current_hp = creature.max_hp * DEFEAT_HP_PERCENT // 100
        else:
            creature.current_hp = self.player.hp
        creature.repair()
        result: BattleResult = {
            "outcome": self.outcome,
            "enemy_id": self.enemy_species.id,
            "rounds": self.round,
            "player_hp": creature.current_hp,
            "rewards": list(self.rewards),
        }
        logger.info("BattleClosed", outcome=self.outcome, enemy=self.enemy_species.id, hp=creature.current_hp)
        self._reset()
        return result

    # ---------------- Selection -----------------
    def available_indices(self) -> List[int]:
        if self.player is None:
            return []
        return [i for i, mid in enumerate(self.player.moves) if mid and i not in self.spent]

    def _selectable(self, index: int) -> bool:
        return isinstance(index, int) and index in self.available_indices()

    def toggle(self, index: int) -> bool:
        """Add or remove ``index``; returns whether it is selected afterwards."""
        self._require(Phase.SELECTION, "toggle")
        if index in self.selection:
            self.selection.remove(index)
            return False
        if len(self.selection) >= MOVES_PER_ROUND or not self._selectable(index):
            return False
        self.selection.append(index)
        return True

    def select_moves(self, indices) -> List[int]:
        self._require(Phase.SELECTION, "select_moves")
        chosen: List[int] = []
        for i in indices:
            if len(chosen) >= MOVES_PER_ROUND:
                break
            if i not in chosen and self._selectable(i):
                chosen.append(i)
        self.selection = chosen
        return list(chosen)

    def confirm(self) -> bool:
        self._require(Phase.SELECTION, "confirm")
        if len(self.selection) < MOVES_PER_ROUND:
            return False
        self._begin_execution()
        return True

    def tick(self, seconds: float) -> bool:
        """Run the selection countdown; returns True when it expired and auto-confirmed."""
        if self.phase is not Phase.SELECTION or not seconds > 0:
            return False
        self.time_left = max(0.0, self.time_left - seconds)
        if self.time_left > 0:
            return False
        self.selection = self.available_indices()[:MOVES_PER_ROUND]
        logger.debug("SelectionTimeout", round=self.round, selection=self.selection)
        self.log.append("Time's up! Moves were chosen automatically.")
        self._begin_execution()
        return True

    def _begin_execution(self):
        self.enemy_selection = self.core.draw_moves(len(self.enemy.moves))
        self.phase = Phase.EXECUTION
        self._pair = 0
        self._step = 0
        self._skills = None
        self.log.append(f"--- Round {self.round} ---")
        logger.debug("RoundStart", round=self.round, player=self.selection, enemy=self.enemy_selection)

    # ---------------- Execution -----------------
    def advance(self) -> BattleEvent:
        if self.phase is Phase.INTRO:
            self.phase = Phase.SELECTION
            self.round = 1
            self.time_left = self.selection_seconds
            return self._event("intro")
        if self.phase is Phase.EXECUTION:
            return self._step_execution()
        state = self.phase.value if self.phase else "idle"
        raise BattleStateError(f"advance not allowed while {state}")

    def _event(self, kind: EventKind, actor: Optional[str] = None, skill: Optional[Skill] = None,
               amount: int = 0) -> BattleEvent:
        return BattleEvent(kind=kind, round=self.round,
                           pair=self._pair if self.phase is Phase.EXECUTION else None,
                           actor=actor, skill_id=skill.id if skill else None, amount=amount,
                           player_hp=self.player.hp, enemy_hp=self.enemy.hp)

    def _pair_skills(self) -> Tuple[Skill, Skill]:
        if self._skills is None:
            p_idx = self.selection[self._pair] if self._pair < len(self.selection) else None
            p_mid = self.player.moves[p_idx] if p_idx is not None else None
            e_idx = self.enemy_selection[self._pair] if self._pair < len(self.enemy_selection) else None
            e_mid = self.enemy.moves[e_idx] if e_idx is not None else None
            self._skills = (resolve_skill(p_mid), resolve_skill(e_mid))
        return self._skills

    def _step_execution(self) -> BattleEvent:
        if self._step == 0:
            if self._pair >= MOVES_PER_ROUND or not (self.player.alive and self.enemy.alive):
                return self._finish_round()
            self.player.bracing = self.enemy.bracing = False
        p_sk, e_sk = self._pair_skills()
        step = self._step
        if step == 0:
            ev = self._reveal(PLAYER, self.player, p_sk)
        elif step == 1:
            ev = self._reveal(ENEMY, self.enemy, e_sk)
        elif step == 2:
            ev = self._act(PLAYER, self.player, p_sk, self.enemy, e_sk)
        else:
            if self.player.alive and self.enemy.alive:
                ev = self._act(ENEMY, self.enemy, e_sk, self.player, p_sk)
            else:
                ev = self._event("skip", ENEMY, e_sk)
            if self._pair < len(self.selection):
                self.spent.append(self.selection[self._pair])
            self._pair += 1
            self._step = 0
            self._skills = None
            return ev
        self._step += 1
        return ev

    def _reveal(self, side: str, actor: Combatant, skill: Skill) -> BattleEvent:
        self.log.append(f"{actor.name}: {skill.name}")
        if skill.is_heal:
            return self._event("heal", side, skill, self.core.heal(actor, skill))
        if skill.attribute == TORNADO:
            actor.bracing = True
            self.log.append(f"{actor.name} is bracing...")
            return self._event("brace", side, skill)
        return self._event("reveal", side, skill)

    def _act(self, side: str, actor: Combatant, skill: Skill, target: Combatant, target_skill: Skill) -> BattleEvent:
        if skill.is_heal:
            return self._event("hold", side, skill)
        if is_reflected(target_skill, skill):
            # this side already bounced the opponent's attack
            return self._event("skip", side, skill)
        if skill.attribute == TORNADO:
            # counters only deal damage through reflection
            return self._event("hold", side, skill)
        if is_reflected(skill, target_skill):
            return self._event("reflect", side, skill, self.core.reflect(actor, skill, target))
        return self._event("strike", side, skill, self.core.strike(actor, skill, target))

    def _finish_round(self) -> BattleEvent:
        if self.player.alive and self.enemy.alive and self.round < self.rounds:
            ev = self._event("round_end")
            self.round += 1
            self.phase = Phase.SELECTION
            self.selection = []
            self.enemy_selection = []
            self.time_left = self.selection_seconds
            return ev
        if not self.player.alive:
            self.outcome = PLAYER_LOSS
        elif not self.enemy.alive:
            self.outcome = PLAYER_WIN
        else:
            # round limit: ties go to the player
            self.outcome = PLAYER_WIN if self.player.hp >= self.enemy.hp else PLAYER_LOSS
        if self.outcome == PLAYER_WIN:
            self.log.append(f"{self.enemy.name} was defeated!")
            self.rewards = self.core.roll_rewards(self.enemy_species.rewards)
        else:
            self.log.append(f"{self.player.name} was defeated...")
        self.phase = Phase.RESULT
        logger.info("BattleEnd", outcome=self.outcome, round=self.round, player_hp=self.player.hp,
                    enemy_hp=self.enemy.hp, rewards=[r.item_id for r in self.rewards])
        return self._event("result")

    # ---------------- Views & helpers -----------------
    def snapshot(self) -> BattleSnapshot:
        return BattleSnapshot(
            phase=self.phase,
            round=self.round,
            rounds=self.rounds,
            time_left=self.time_left,
            player=_view(self.player) if self.player else None,
            enemy=_view(self.enemy) if self.enemy else None,
            selection=tuple(self.selection),
            enemy_selection=tuple(self.enemy_selection),
            spent=tuple(self.spent),
            available=tuple(self.available_indices()),
            outcome=self.outcome,
            rewards=tuple(r.item_id for r in self.rewards),
            log=tuple(self.log),
        )

    def run_auto(self, max_steps: int = 500) -> str:
        """Play to the result phase, letting the countdown pick every round."""
        steps = 0
        while self.phase is not Phase.RESULT and steps < max_steps:
            if self.phase is Phase.SELECTION:
                self.tick(self.time_left or self.selection_seconds)
            else:
                self.advance()
            steps += 1
        return self.outcome or "ONGOING"

__all__ = ["BattleController","BattleEvent","BattleSnapshot","BattleResult","SideView","Phase",
           "PLAYER_WIN","PLAYER_LOSS","DEFAULT_ROUNDS","DEFAULT_SELECTION_SECONDS"]
