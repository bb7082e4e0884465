from league import db  # noqa: F401 - imported for model imports

from .bowler import Bowler
from .game import Game
from .prediction import Prediction, SeriesPrediction
from .week import Week

__all__ = [
    "Bowler",
    "Week",
    "Game",
    "Prediction",
    "SeriesPrediction",
]
