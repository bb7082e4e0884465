from datetime import datetime, timezone

from league import db
from league.utils.records import PredictionInput


class Prediction(db.Model):
    """A bowler's guess at a teammate's score for one game of a week"""

    __tablename__ = "predictions"

    id = db.Column(db.Integer, primary_key=True)

    week_id = db.Column(db.Integer, db.ForeignKey("weeks.id"), nullable=False)
    predictor_id = db.Column(db.Integer, db.ForeignKey("bowlers.id"), nullable=False)
    target_id = db.Column(db.Integer, db.ForeignKey("bowlers.id"), nullable=False)
    game_number = db.Column(db.Integer, nullable=False)
    predicted_score = db.Column(db.Integer, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    predictor = db.relationship("Bowler", foreign_keys=[predictor_id])
    target = db.relationship("Bowler", foreign_keys=[target_id])

    __table_args__ = (
        db.UniqueConstraint(
            "week_id",
            "predictor_id",
            "target_id",
            "game_number",
            name="unique_week_predictor_target_game",
        ),
        db.CheckConstraint("predictor_id != target_id", name="no_self_prediction"),
        db.CheckConstraint("game_number BETWEEN 1 AND 3", name="valid_prediction_game"),
        db.CheckConstraint(
            "predicted_score BETWEEN 0 AND 300", name="valid_predicted_score"
        ),
        db.Index("idx_prediction_week_predictor", "week_id", "predictor_id"),
    )

    def __repr__(self):
        return f"<Prediction {self.predictor_id}->{self.target_id} week_id={self.week_id} #{self.game_number}: {self.predicted_score}>"

    NATURAL_KEY = ("week_id", "predictor_id", "target_id", "game_number")

    @classmethod
    def natural_key(cls, row):
        return tuple(row[name] for name in cls.NATURAL_KEY)

    def to_input(self):
        return PredictionInput(
            predictor_id=self.predictor_id,
            target_id=self.target_id,
            predicted=self.predicted_score,
            week_id=self.week_id,
            week_number=self.week.week_number if self.week else None,
            game_number=self.game_number,
        )

    def to_dict(self):
        """Convert prediction to dictionary for API responses"""
        return {
            "id": self.id,
            "week_id": self.week_id,
            "predictor_id": self.predictor_id,
            "target_id": self.target_id,
            "game_number": self.game_number,
            "predicted_score": self.predicted_score,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class SeriesPrediction(db.Model):
    """Deprecated single series-total prediction.

    Superseded by per-game ``Prediction`` rows. Kept so older entries still
    count; they are scored through the same engine against series totals.
    """

    __tablename__ = "series_predictions"

    id = db.Column(db.Integer, primary_key=True)

    week_id = db.Column(db.Integer, db.ForeignKey("weeks.id"), nullable=False)
    predictor_id = db.Column(db.Integer, db.ForeignKey("bowlers.id"), nullable=False)
    target_id = db.Column(db.Integer, db.ForeignKey("bowlers.id"), nullable=False)
    predicted_series = db.Column(db.Integer, nullable=False)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    week = db.relationship("Week", foreign_keys=[week_id])

    __table_args__ = (
        db.UniqueConstraint(
            "week_id", "predictor_id", "target_id", name="unique_week_series_prediction"
        ),
        db.CheckConstraint(
            "predictor_id != target_id", name="no_self_series_prediction"
        ),
        db.CheckConstraint(
            "predicted_series BETWEEN 0 AND 900", name="valid_predicted_series"
        ),
    )

    def __repr__(self):
        return f"<SeriesPrediction {self.predictor_id}->{self.target_id} week_id={self.week_id}: {self.predicted_series}>"

    NATURAL_KEY = ("week_id", "predictor_id", "target_id")

    @classmethod
    def natural_key(cls, row):
        return tuple(row[name] for name in cls.NATURAL_KEY)

    def to_input(self):
        return PredictionInput(
            predictor_id=self.predictor_id,
            target_id=self.target_id,
            predicted=self.predicted_series,
            week_id=self.week_id,
            week_number=self.week.week_number if self.week else None,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "week_id": self.week_id,
            "predictor_id": self.predictor_id,
            "target_id": self.target_id,
            "predicted_series": self.predicted_series,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
