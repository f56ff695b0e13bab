"""Forms for the leaderboard blueprint."""

from wtforms.validators import DataRequired, Optional

from bracketeer.core.forms import ApiForm, JSONStringField


class UpdateLeaderboardsForm(ApiForm):
    """Payload for folding a stored wrap report into the leaderboards."""

    competitionId = JSONStringField("Competition", validators=[DataRequired()])
    gameId = JSONStringField("Game", validators=[DataRequired()])
    leagueId = JSONStringField("League", validators=[Optional()])
