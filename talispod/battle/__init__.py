"""
Battle package: round-based combat against catalog enemies.
- core.py (Combatant, damage/heal/reflection math, random draws)
- factory.py (combatants from creatures and enemy species)
- session.py (BattleController state machine)
"""
from .session import BattleController
__all__ = ["BattleController"]
