"""
Shogi Engine

Move selection for a computer shogi opponent at three difficulty tiers,
on top of a pluggable rules backend.

## Architecture

The engine is organized into several key modules:

1. **board**: Value types
   - Side, PieceKind, Square, Move, ScoredMove
   - Array snapshot of a position

2. **rules**: Rules backend
   - Abstract RulesAuthority interface (legal moves, push/pop, queries)
   - CShogiRules: implementation on top of cshogi

3. **evaluation**: Position evaluation
   - Abstract Evaluator interface (swappable design)
   - MaterialEvaluator: board and reserve material
   - Material values and positional tables

4. **selection**: Heuristic strategies
   - beginner: random, with an occasional eye for captures
   - intermediate: captures first, then centre control

5. **search**: Adversarial search
   - Minimax with alpha-beta pruning (advanced tier)
   - Single-ply heuristic scoring and move ordering

6. **policy**: Difficulty policy
   - Tier → strategy mapping with random fallback on faults
   - Background worker with new-game cancellation

7. **usi**: Universal Shogi Interface protocol
   - USI command handling for shogi GUIs

## Quick Start

### As a Python Library

```python
from shogi_engine.policy import DifficultyPolicy
from shogi_engine.rules import CShogiRules

rules = CShogiRules()
board = rules.new_position()

policy = DifficultyPolicy(rules)
move = policy.choose_move(board, "advanced")
print(f"Engine plays: {move.usi()}")
```

### As a USI Engine

```bash
python -m shogi_engine.usi
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__author__ = "Alix Muller"
__license__ = "MIT"

__all__ = []
