from datetime import datetime, timezone

from league import db
from league.utils.records import GameScore


class Game(db.Model):
    """One game score, keyed by (week, bowler, game number)"""

    __tablename__ = "games"

    id = db.Column(db.Integer, primary_key=True)

    week_id = db.Column(db.Integer, db.ForeignKey("weeks.id"), nullable=False)
    bowler_id = db.Column(db.Integer, db.ForeignKey("bowlers.id"), nullable=False)
    game_number = db.Column(db.Integer, nullable=False)

    # Null until the game is bowled
    score = db.Column(db.Integer)

    # Timestamps
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        db.UniqueConstraint(
            "week_id", "bowler_id", "game_number", name="unique_week_bowler_game"
        ),
        db.CheckConstraint("game_number BETWEEN 1 AND 3", name="valid_game_number"),
        db.CheckConstraint(
            "score IS NULL OR (score BETWEEN 0 AND 300)", name="valid_score"
        ),
        db.Index("idx_game_week", "week_id"),
        db.Index("idx_game_bowler", "bowler_id"),
    )

    def __repr__(self):
        return f"<Game bowler_id={self.bowler_id} week_id={self.week_id} #{self.game_number} score={self.score}>"

    NATURAL_KEY = ("week_id", "bowler_id", "game_number")

    @classmethod
    def natural_key(cls, row):
        return tuple(row[name] for name in cls.NATURAL_KEY)

    def to_record(self):
        return GameScore(
            bowler_id=self.bowler_id,
            week_id=self.week_id,
            game_number=self.game_number,
            score=self.score,
        )

    def to_dict(self):
        """Convert game to dictionary for API responses"""
        return {
            "id": self.id,
            "week_id": self.week_id,
            "bowler_id": self.bowler_id,
            "game_number": self.game_number,
            "score": self.score,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
