import random
from datetime import datetime
import pytest
from talispod.battle.session import PLAYER_LOSS, PLAYER_WIN
from talispod.core.errors import ItemNotUsableError
from talispod.creature.factory import new_creature
from talispod.environment.rank import NEUTRAL_SAMPLE, Rank
from talispod.game.context import GameContext
from talispod.system.settings import Settings, SettingsData
import talispod.system.save as save_mod

NOON = datetime(2026, 6, 1, 12, 0)

def make_ctx(tmp_path, creature=None, **kw):
    settings = Settings(SettingsData(), tmp_path / "settings.json")
    return GameContext(creature or new_creature("blazedragon"), settings,
                       rng=random.Random(3), clock=lambda: NOON, **kw)

def test_environment_drives_growth(tmp_path):
    ctx = make_ctx(tmp_path)
    assert ctx.environment == NEUTRAL_SAMPLE
    assert ctx.update(120) and ctx.creature.grown_hp == 0
    ctx.set_environment(1000, 0, 100)  # V1, blazedragon best area off its exact optimum
    assert ctx.evaluate().rank is Rank.BEST
    ticks = ctx.update(120)
    assert len(ticks) == 2
    assert ctx.creature.grown_hp == 60

def test_growth_frozen_during_battle(tmp_path):
    ctx = make_ctx(tmp_path)
    ctx.set_environment(1000, 0, 100)
    ctx.update(45)
    ctx.start_battle("harpy")
    assert ctx.growth.suspended
    assert ctx.growth.seconds_until_tick() == 60
    assert ctx.update(600) == []
    ctx.battle.run_auto()
    ctx.close_battle()
    assert not ctx.growth.suspended
    assert ctx.creature.grown_hp == 0
    assert ctx.growth.seconds_until_tick() == 60
    assert len(ctx.update(60)) == 1

def test_loss_resets_environment_and_applies_penalty(tmp_path):
    ctx = make_ctx(tmp_path)
    ctx.set_environment(1000, 0, 100)
    ctx.start_battle("harpy")
    ctx.battle.enemy.hp = ctx.battle.enemy.max_hp = 10000
    ctx.battle.enemy.moves = ["skill_orc"] * 15
    ctx.battle.player.hp = 1
    ctx.battle.run_auto()
    result = ctx.close_battle()
    assert result["outcome"] == PLAYER_LOSS
    assert ctx.environment == NEUTRAL_SAMPLE
    assert ctx.creature.current_hp == 100
    assert ctx.inventory == {}

def test_win_adds_rewards_to_inventory(tmp_path):
    ctx = make_ctx(tmp_path)
    ctx.start_battle("tornadoking")
    ctx.battle.enemy.hp = 1
    ctx.battle.enemy.moves = ["skill_basic_slap"] * 15
    ctx.battle.run_auto()
    result = ctx.close_battle()
    assert result["outcome"] == PLAYER_WIN
    assert ctx.inventory == {"fragment_tornadoking": 1, "soul_tornado": 1}
    use = ctx.use_item("fragment_tornadoking")
    assert use.amount == 50 and ctx.creature.grown_stats["counter"] == 50
    with pytest.raises(ItemNotUsableError):
        ctx.use_item("soul_tornado")

def test_save_and_load_slot(tmp_path, monkeypatch):
    monkeypatch.setattr(save_mod, "_save_dir", lambda: tmp_path)
    ctx = make_ctx(tmp_path, inventory={"crystal_cost": 2}, slot=2)
    ctx.set_environment(1000, 0, 100)
    ctx.update(180)
    ctx.save()
    loaded = GameContext.load(2, ctx.settings, clock=lambda: NOON)
    assert loaded.creature.grown_hp == ctx.creature.grown_hp == 90
    assert loaded.creature.grown_stats == ctx.creature.grown_stats
    assert loaded.inventory == {"crystal_cost": 2}
    assert loaded.play_time_seconds == 180
    assert loaded.environment == NEUTRAL_SAMPLE
    assert GameContext.load(9, ctx.settings) is None
