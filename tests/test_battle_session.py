import random
import pytest
from talispod.battle.core import BattleCore
from talispod.battle.session import BattleController, Phase, PLAYER_WIN, PLAYER_LOSS
from talispod.core.errors import BattleStateError
from talispod.creature.factory import new_creature

class ScriptedCore(BattleCore):
    """Enemy picks come from a script instead of the RNG."""
    def __init__(self, picks, rng=None):
        super().__init__(rng or random.Random(0))
        self.picks = list(picks)

    def draw_moves(self, slots, count=3):
        return self.picks.pop(0) if self.picks else [1, 1, 1]

def begin(picks=(), enemy="harpy", species="blazedragon", **kw):
    # blazedragon: 0 Burn Flame, 1/3/5/7/8/9 slap, 2 Flame, 4 Petit Flame, 6 Cure, 10-14 empty
    ctl = BattleController(ScriptedCore(picks), **kw)
    creature = new_creature(species)
    ctl.start(creature, enemy)
    ev = ctl.advance()
    assert ev.kind == "intro" and ctl.phase is Phase.SELECTION
    return ctl, creature

def run_round(ctl):
    events = []
    while ctl.phase is Phase.EXECUTION:
        events.append(ctl.advance())
    return events

def test_start_snapshot():
    ctl = BattleController(ScriptedCore([]))
    snap = ctl.start(new_creature("blazedragon"), "harpy")
    assert snap.phase is Phase.INTRO
    assert snap.player.hp == 500 and snap.enemy.hp == 100
    assert snap.available == (0, 1, 2, 3, 4, 5, 6, 7, 8, 9)

def test_player_hp_starts_at_least_one():
    ctl = BattleController(ScriptedCore([]))
    blaze = new_creature("blazedragon")
    blaze.current_hp = 0
    ctl.start(blaze, "harpy")
    assert ctl.player.hp == 1

def test_toggle_and_fourth_pick_ignored():
    ctl, _ = begin()
    assert ctl.toggle(0) and ctl.toggle(1) and ctl.toggle(2)
    assert not ctl.toggle(3)
    assert ctl.selection == [0, 1, 2]
    assert not ctl.toggle(1)
    assert ctl.selection == [0, 2]
    assert not ctl.toggle(12)  # empty slot

def test_confirm_refused_below_three():
    ctl, _ = begin()
    ctl.select_moves([0, 1])
    assert ctl.confirm() is False
    assert ctl.phase is Phase.SELECTION

def test_select_moves_filters_invalid_entries():
    ctl, _ = begin()
    assert ctl.select_moves([99, 11, 4, 4, 5, 6, 7]) == [4, 5, 6]

def test_pair_order_and_reflection():
    ctl, blaze = begin(picks=[[0, 1, 1]])
    ctl.select_moves([2, 1, 3])
    assert ctl.confirm()
    events = run_round(ctl)
    first = [(e.kind, e.actor) for e in events[:4]]
    assert first == [("reveal", "player"), ("brace", "enemy"), ("reflect", "player"), ("skip", "enemy")]
    assert events[2].amount == 68   # harpy counter 130 * 0.35 * 1.5
    assert events[2].player_hp == 432 and events[2].enemy_hp == 100
    # pair 2: slap 20 on harpy, harpy slap 4 back
    assert events[6].kind == "strike" and events[6].amount == 20
    assert events[7].kind == "strike" and events[7].amount == 4
    assert events[-1].kind == "round_end"
    assert ctl.phase is Phase.SELECTION and ctl.round == 2
    assert ctl.spent == [2, 1, 3]

def test_bracing_side_deals_no_damage_without_volcano_attack():
    ctl, _ = begin(picks=[[0, 0, 0]])
    ctl.select_moves([1, 3, 5])
    ctl.confirm()
    events = run_round(ctl)
    enemy_actions = [(e.kind, e.amount) for e in events if e.actor == "enemy" and e.kind not in ("reveal", "brace")]
    assert enemy_actions == [("hold", 0)] * 3
    assert ctl.player.hp == 500
    assert [e.kind for e in events[:4]] == ["reveal", "brace", "strike", "hold"]

def test_spent_moves_excluded_next_round():
    ctl, _ = begin()
    ctl.select_moves([1, 3, 5])
    ctl.confirm()
    run_round(ctl)
    assert ctl.phase is Phase.SELECTION
    assert not ctl.toggle(1)
    assert ctl.select_moves([1, 3, 5, 7, 8, 9]) == [7, 8, 9]
    assert 1 not in ctl.snapshot().available

def test_enemy_acts_only_while_both_alive():
    ctl, blaze = begin(picks=[[1, 1, 1]])
    ctl.select_moves([0, 1, 3])
    ctl.confirm()
    events = run_round(ctl)
    assert events[2].kind == "strike" and events[2].amount == 120
    assert events[3].kind == "skip"
    assert events[4].kind == "result"
    assert ctl.phase is Phase.RESULT and ctl.outcome == PLAYER_WIN
    assert ctl.spent == [0]

def test_timeout_autofills_first_available():
    ctl, _ = begin(selection_seconds=30)
    ctl.toggle(5)
    assert ctl.tick(29) is False
    assert ctl.tick(1) is True
    assert ctl.selection == [0, 1, 2]
    assert ctl.phase is Phase.EXECUTION

def test_timeout_with_few_moves_uses_basic_move():
    ctl, _ = begin(selection_seconds=30)
    ctl.spent.extend([0, 1, 2, 3, 4, 5, 6, 7, 8])
    ctl.tick(30)
    assert ctl.selection == [9]
    events = run_round(ctl)
    player_actions = [e for e in events if e.actor == "player" and e.kind == "strike"]
    assert len(player_actions) == 3
    assert all(e.skill_id == "skill_basic_slap" for e in player_actions)

def _stalemate(ctl, player_hp, enemy_hp):
    for c in (ctl.player, ctl.enemy):
        c.stats = {k: 0 for k in c.stats}
    ctl.player.hp = player_hp
    ctl.enemy.hp = enemy_hp

def test_round_limit_tie_goes_to_player():
    ctl, _ = begin(rounds=1)
    _stalemate(ctl, 50, 50)
    ctl.select_moves([1, 3, 5])
    ctl.confirm()
    events = run_round(ctl)
    assert events[-1].kind == "result"
    assert ctl.outcome == PLAYER_WIN

def test_round_limit_lower_hp_loses():
    ctl, _ = begin(rounds=1)
    _stalemate(ctl, 49, 50)
    ctl.select_moves([1, 3, 5])
    ctl.confirm()
    run_round(ctl)
    assert ctl.outcome == PLAYER_LOSS

def test_five_rounds_then_result():
    ctl, _ = begin()
    _stalemate(ctl, 80, 80)
    rounds_seen = set()
    while ctl.phase is not Phase.RESULT:
        rounds_seen.add(ctl.round)
        ctl.tick(30)
        run_round(ctl)
    assert rounds_seen == {1, 2, 3, 4, 5}
    assert ctl.round == 5

def test_close_writes_hp_back_on_win():
    ctl, blaze = begin(picks=[[0, 1, 1]])
    ctl.select_moves([2, 0, 3])
    ctl.confirm()
    run_round(ctl)
    assert ctl.outcome == PLAYER_WIN
    hp = ctl.player.hp
    result = ctl.close()
    assert result["outcome"] == PLAYER_WIN
    assert blaze.current_hp == hp == result["player_hp"]
    assert not ctl.active

def test_defeat_penalty():
    ctl, blaze = begin(enemy="harpy")
    ctl.player.hp = 3
    ctl.select_moves([1, 3, 5])
    ctl.confirm()
    run_round(ctl)
    assert ctl.outcome == PLAYER_LOSS
    ctl.close()
    assert blaze.current_hp == 100  # floor(500 * 20%)

def test_rewards_granted_on_win():
    ctl, _ = begin(picks=[[1, 1, 1]], enemy="tornadoking")
    ctl.enemy.hp = 1
    ctl.select_moves([1, 3, 5])
    ctl.confirm()
    run_round(ctl)
    result = ctl.close()
    assert {r.item_id for r in result["rewards"]} == {"fragment_tornadoking", "soul_tornado"}

def test_unknown_enemy_and_skill_fallbacks():
    ctl, _ = begin(picks=[[0, 0, 0]], enemy="no_such_enemy")
    assert ctl.enemy_species.id == "harpy"
    ctl.enemy.moves[0] = "skill_missing"
    ctl.select_moves([1, 3, 5])
    ctl.confirm()
    events = run_round(ctl)
    assert events[1].skill_id == "skill_basic_slap"

def test_phase_guards():
    ctl = BattleController(ScriptedCore([]))
    with pytest.raises(BattleStateError):
        ctl.advance()
    with pytest.raises(BattleStateError):
        ctl.close()
    ctl.start(new_creature("blazedragon"), "harpy")
    with pytest.raises(BattleStateError):
        ctl.start(new_creature("windragon"), "harpy")
    with pytest.raises(BattleStateError):
        ctl.toggle(0)
    ctl.advance()
    with pytest.raises(BattleStateError):
        ctl.advance()
    with pytest.raises(BattleStateError):
        ctl.close()

def test_run_auto_is_reproducible():
    outcomes = []
    for _ in range(2):
        ctl = BattleController(BattleCore(random.Random(42)))
        ctl.start(new_creature("windragon"), "wyvern")
        outcome = ctl.run_auto()
        outcomes.append((outcome, ctl.round, ctl.player.hp, ctl.enemy.hp, tuple(ctl.log)))
        assert outcome in (PLAYER_WIN, PLAYER_LOSS)
    assert outcomes[0] == outcomes[1]
