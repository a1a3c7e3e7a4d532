"""
遊戲常數

Vier Bure 每回合的 top 分數總和固定為 157；Match 以保留值 -257 記錄。
"""

TOTAL_POINTS_PER_ROUND = 157
MATCH_VALUE = -257

MIN_PLAYERS = 3
MAX_PLAYERS = 6
DEFAULT_PLAYER_COUNT = 4

MAX_SCORE_VALUE = 999
MIN_SCORE_VALUE = -999

MAX_NAME_LENGTH = 10

# Bottom 分數快捷加減值
SCORE_INCREMENTS = (20, 50, 100, 150)
SCORE_DECREMENTS = (-20, -50, -100, -150)
