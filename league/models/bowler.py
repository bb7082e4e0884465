from datetime import datetime, timezone

from league import db

AVATAR_COLORS = [
    "#ef4444",
    "#f97316",
    "#eab308",
    "#22c55e",
    "#06b6d4",
    "#3b82f6",
    "#8b5cf6",
    "#ec4899",
]


class Bowler(db.Model):
    __tablename__ = "bowlers"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    nickname = db.Column(db.String(50))

    # Optional PIN, not an authentication mechanism
    pin_code = db.Column(db.String(10))
    avatar_color = db.Column(db.String(7), nullable=False, default=AVATAR_COLORS[0])
    is_active = db.Column(db.Boolean, default=True)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    games = db.relationship(
        "Game", backref="bowler", lazy="dynamic", cascade="all, delete-orphan"
    )

    __table_args__ = (db.Index("idx_bowler_name", "name"),)

    def __repr__(self):
        return f"<Bowler {self.name}>"

    @property
    def display_name(self):
        return self.nickname or self.name

    @staticmethod
    def create_bowler(
        name, nickname=None, pin_code=None, avatar_color=None, is_active=None
    ):
        """Create a new bowler, picking an avatar color if none was given"""
        if not avatar_color:
            avatar_color = AVATAR_COLORS[Bowler.query.count() % len(AVATAR_COLORS)]
        bowler = Bowler(
            name=name.strip(),
            nickname=nickname or None,
            pin_code=pin_code or None,
            avatar_color=avatar_color,
            is_active=True if is_active is None else is_active,
        )
        db.session.add(bowler)
        return bowler

    def update(
        self, name=None, nickname=None, pin_code=None, avatar_color=None, is_active=None
    ):
        if name is not None:
            self.name = name.strip()
        if nickname is not None:
            self.nickname = nickname or None
        if pin_code is not None:
            self.pin_code = pin_code or None
        if avatar_color is not None:
            self.avatar_color = avatar_color
        if is_active is not None:
            self.is_active = is_active

    def to_dict(self):
        """Convert bowler to dictionary for API responses"""
        return {
            "id": self.id,
            "name": self.name,
            "nickname": self.nickname,
            "has_pin": bool(self.pin_code),
            "avatar_color": self.avatar_color,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
