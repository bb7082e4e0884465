from flask_wtf import FlaskForm
from wtforms import IntegerField
from wtforms.validators import InputRequired, NumberRange, ValidationError

from league.forms.scores import MAX_GAME_SCORE

MAX_SERIES_PREDICTION = 900


class _PredictionBaseForm(FlaskForm):
    class Meta:
        csrf = False

    week_id = IntegerField("Week", validators=[InputRequired()])
    predictor_id = IntegerField("Predictor", validators=[InputRequired()])
    target_id = IntegerField("Target", validators=[InputRequired()])

    def validate_target_id(self, field):
        if field.data is not None and field.data == self.predictor_id.data:
            raise ValidationError("Bowlers cannot predict their own score")

    @staticmethod
    def owner_context(row):
        return {
            "predictor_id": row.get("predictor_id"),
            "target_id": row.get("target_id"),
            "game_number": row.get("game_number"),
        }


class PredictionForm(_PredictionBaseForm):
    game_number = IntegerField(
        "Game",
        validators=[
            InputRequired(),
            NumberRange(min=1, max=3, message="Game number must be 1, 2 or 3"),
        ],
    )
    predicted_score = IntegerField(
        "Predicted Score",
        validators=[
            InputRequired(),
            NumberRange(
                min=0,
                max=MAX_GAME_SCORE,
                message=f"Prediction must be between 0 and {MAX_GAME_SCORE}",
            ),
        ],
    )

    def cleaned_data(self):
        return {
            "week_id": self.week_id.data,
            "predictor_id": self.predictor_id.data,
            "target_id": self.target_id.data,
            "game_number": self.game_number.data,
            "predicted_score": self.predicted_score.data,
        }


class SeriesPredictionForm(_PredictionBaseForm):
    """Deprecated series-total prediction entry"""

    predicted_series = IntegerField(
        "Predicted Series",
        validators=[
            InputRequired(),
            NumberRange(
                min=0,
                max=MAX_SERIES_PREDICTION,
                message=f"Series prediction must be between 0 and {MAX_SERIES_PREDICTION}",
            ),
        ],
    )

    def cleaned_data(self):
        return {
            "week_id": self.week_id.data,
            "predictor_id": self.predictor_id.data,
            "target_id": self.target_id.data,
            "predicted_series": self.predicted_series.data,
        }
