"""Forms for the bracket blueprint."""

from wtforms import ValidationError
from wtforms.validators import DataRequired, Length

from bracketeer.core.constants import MAX_TICKET_CODE_LENGTH, MIN_TICKET_CODE_LENGTH
from bracketeer.core.forms import ApiForm, JSONNumberField, JSONStringField


class ScoreSubmissionForm(ApiForm):
    """Payload for reporting a score."""

    userId = JSONStringField("User", validators=[DataRequired()])
    matchId = JSONStringField("Match", validators=[DataRequired()])
    code = JSONStringField(
        "Ticket code",
        validators=[
            DataRequired(),
            Length(min=MIN_TICKET_CODE_LENGTH, max=MAX_TICKET_CODE_LENGTH),
        ],
    )
    score = JSONNumberField("Score")

    def validate_score(self, field):
        """Validate that the score is present and not negative."""
        if field.errors:
            return
        if field.data is None:
            raise ValidationError("Score is required.")
        if field.data < 0:
            raise ValidationError("Score cannot be negative.")

    @property
    def score_value(self):
        """The score as an int when it has no fractional part."""
        value = self.score.data
        return int(value) if float(value).is_integer() else value


class ResolveTieForm(ApiForm):
    """Payload for manually resolving a tied match."""

    winnerId = JSONStringField("Winner", validators=[DataRequired()])


class ReplaceBracketForm(ApiForm):
    """Version guard sent along with a bracket replacement."""

    expectedVersion = JSONNumberField("Expected version", integer=True)

    def validate_expectedVersion(self, field):
        if not field.errors and field.data is None:
            raise ValidationError("expectedVersion is required.")
