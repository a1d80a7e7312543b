"""Well-known event type constants.

Defined centrally so publishers and subscribers reference the same strings.
"""

# --- Input events (presentation layer → core) -----------------------------

BLOCK_HIT = "input.block.hit"
NEW_GAME_REQUESTED = "input.game.new"
CONFIGURE_REQUESTED = "input.game.configure"

# --- Round events (core → presentation layer) -----------------------------

EQUATION_CHANGED = "game.equation.changed"
ANSWER_CORRECT = "game.answer.correct"
ANSWER_WRONG = "game.answer.wrong"
STATS_CHANGED = "game.stats.changed"

# --- Session lifecycle events ---------------------------------------------

GAME_RESET = "game.reset"
LIVES_CHANGED = "game.lives.changed"
LIVES_EXHAUSTED = "game.lives.exhausted"
