from datetime import datetime, timezone

from league import db


class Week(db.Model):
    """A league night.

    Lifecycle: open -> predictions locked -> complete. Locking stops
    prediction writes; completing also stops score writes.
    """

    __tablename__ = "weeks"

    id = db.Column(db.Integer, primary_key=True)
    week_number = db.Column(db.Integer, nullable=False, unique=True, index=True)
    bowling_date = db.Column(db.Date)

    # Status
    predictions_locked = db.Column(db.Boolean, default=False, nullable=False)
    is_complete = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    games = db.relationship(
        "Game", backref="week", lazy="dynamic", cascade="all, delete-orphan"
    )
    predictions = db.relationship(
        "Prediction", backref="week", lazy="dynamic", cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.UniqueConstraint("week_number", name="unique_week_number"),
        db.CheckConstraint("week_number > 0", name="positive_week_number"),
    )

    def __repr__(self):
        return f"<Week {self.week_number}>"

    @property
    def status(self):
        if self.is_complete:
            return "complete"
        if self.predictions_locked:
            return "locked"
        return "open"

    @property
    def accepts_predictions(self):
        return not self.predictions_locked and not self.is_complete

    @property
    def accepts_scores(self):
        return not self.is_complete

    @staticmethod
    def get_current_week():
        """Earliest week that is not complete, else the latest week"""
        week = (
            Week.query.filter_by(is_complete=False)
            .order_by(Week.week_number.asc())
            .first()
        )
        if week:
            return week
        return Week.query.order_by(Week.week_number.desc()).first()

    @staticmethod
    def next_week_number():
        latest = Week.query.order_by(Week.week_number.desc()).first()
        return latest.week_number + 1 if latest else 1

    @staticmethod
    def create_week(week_number=None, bowling_date=None):
        week = Week(
            week_number=week_number or Week.next_week_number(),
            bowling_date=bowling_date,
        )
        db.session.add(week)
        return week

    def lock_predictions(self):
        self.predictions_locked = True

    def unlock_predictions(self):
        """Reopen predictions; a completed week stays closed"""
        if self.is_complete:
            return False
        self.predictions_locked = False
        return True

    def mark_complete(self):
        """Completing a week also locks its predictions"""
        self.predictions_locked = True
        self.is_complete = True

    def reopen(self):
        self.is_complete = False

    def to_dict(self):
        """Convert week to dictionary for API responses"""
        return {
            "id": self.id,
            "week_number": self.week_number,
            "bowling_date": (
                self.bowling_date.isoformat() if self.bowling_date else None
            ),
            "predictions_locked": self.predictions_locked,
            "is_complete": self.is_complete,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
