"""
Rules Authority Module

The engine's only source of truth about shogi rules. The search and the
selectors depend on the abstract RulesAuthority; CShogiRules is the
concrete backend used outside of tests.

Key Components:
    - RulesAuthority (ABC): legal moves, push/pop, queries
    - applied(): scoped push/pop context manager used by the search
    - CShogiRules: backend built on the cshogi library
"""

from shogi_engine.rules.base import Position, RulesAuthority, applied
from shogi_engine.rules.cshogi_rules import CShogiRules

__all__ = ['CShogiRules', 'Position', 'RulesAuthority', 'applied']
