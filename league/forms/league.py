from flask_wtf import FlaskForm
from wtforms import BooleanField, DateField, IntegerField, StringField
from wtforms.validators import DataRequired, Length, NumberRange, Optional, Regexp


def sanitize_input(text):
    """Trim surrounding whitespace; stored as given otherwise"""
    if not text:
        return text
    return text.strip()


class BowlerForm(FlaskForm):
    class Meta:
        csrf = False

    name = StringField(
        "Name",
        validators=[
            DataRequired(),
            Length(max=100, message="Name cannot exceed 100 characters"),
        ],
    )
    nickname = StringField("Nickname", validators=[Optional(), Length(max=50)])
    pin_code = StringField(
        "PIN",
        validators=[
            Optional(),
            Regexp(r"^\d{4,6}$", message="PIN must be 4 to 6 digits"),
        ],
    )
    avatar_color = StringField(
        "Avatar Color",
        validators=[
            Optional(),
            Regexp(r"^#[0-9a-fA-F]{6}$", message="Color must look like #3b82f6"),
        ],
    )

    is_active = BooleanField(
        "Active", false_values=(False, "false", "False", "0", "")
    )

    def cleaned_data(self):
        return {
            "name": sanitize_input(self.name.data),
            "nickname": sanitize_input(self.nickname.data),
            "pin_code": self.pin_code.data,
            "avatar_color": self.avatar_color.data,
            # None when left out, so a partial update keeps the current value
            "is_active": self.is_active.data if self.is_active.raw_data else None,
        }

    @staticmethod
    def owner_context(row):
        return {}


class WeekForm(FlaskForm):
    class Meta:
        csrf = False

    week_number = IntegerField(
        "Week Number",
        validators=[
            Optional(),
            NumberRange(min=1, message="Week number must be positive"),
        ],
    )
    bowling_date = DateField("Bowling Date", validators=[Optional()])

    def cleaned_data(self):
        return {
            "week_number": self.week_number.data,
            "bowling_date": self.bowling_date.data,
        }

    @staticmethod
    def owner_context(row):
        return {}
