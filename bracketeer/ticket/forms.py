"""Forms for the ticket blueprint."""

from wtforms.validators import DataRequired, Length, NumberRange, Optional

from bracketeer.core.constants import MAX_TICKET_CODE_LENGTH, MIN_TICKET_CODE_LENGTH
from bracketeer.core.forms import ApiForm, JSONNumberField, JSONStringField


class IssueTicketForm(ApiForm):
    """Payload for issuing a ticket."""

    userId = JSONStringField("User", validators=[DataRequired()])
    competitionId = JSONStringField("Competition", validators=[DataRequired()])
    roundId = JSONStringField("Round", validators=[DataRequired()])
    ttlMinutes = JSONNumberField(
        "TTL (minutes)", validators=[Optional(), NumberRange(min=1)], integer=True
    )


class TicketCodeForm(ApiForm):
    """Payload identifying a ticket within a competition."""

    code = JSONStringField(
        "Code",
        validators=[
            DataRequired(),
            Length(min=MIN_TICKET_CODE_LENGTH, max=MAX_TICKET_CODE_LENGTH),
        ],
    )
    competitionId = JSONStringField("Competition", validators=[DataRequired()])
