from flask_wtf import FlaskForm
from wtforms import IntegerField
from wtforms.validators import InputRequired, NumberRange, Optional

MAX_GAME_SCORE = 300


class GameScoreForm(FlaskForm):
    class Meta:
        csrf = False

    week_id = IntegerField("Week", validators=[InputRequired()])
    bowler_id = IntegerField("Bowler", validators=[InputRequired()])
    game_number = IntegerField(
        "Game",
        validators=[
            InputRequired(),
            NumberRange(min=1, max=3, message="Game number must be 1, 2 or 3"),
        ],
    )
    score = IntegerField(
        "Score",
        validators=[
            Optional(),
            NumberRange(
                min=0,
                max=MAX_GAME_SCORE,
                message=f"Score must be between 0 and {MAX_GAME_SCORE}",
            ),
        ],
    )

    def cleaned_data(self):
        return {
            "week_id": self.week_id.data,
            "bowler_id": self.bowler_id.data,
            "game_number": self.game_number.data,
            "score": self.score.data,
        }

    @staticmethod
    def owner_context(row):
        return {"bowler_id": row.get("bowler_id"), "game_number": row.get("game_number")}
