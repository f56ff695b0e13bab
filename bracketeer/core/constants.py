"""Global constants for the bracketeer application."""

# Collection and document names
TICKETS_COLLECTION = "tickets"
COMPETITIONS_COLLECTION = "tournaments"
BRACKET_SUBCOLLECTION = "bracket"
BRACKET_DOCUMENT = "bracketDoc"
REPORTS_SUBCOLLECTION = "reports"
FINAL_REPORT_DOCUMENT = "final"
LEADERBOARDS_COLLECTION = "leaderboards"
LEADERBOARD_PLAYERS_SUBCOLLECTION = "players"

# Ticket-related constants
TICKET_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
DEFAULT_TICKET_CODE_LENGTH = 10
DEFAULT_TICKET_TTL_MINUTES = 60
MIN_TICKET_CODE_LENGTH = 6
MAX_TICKET_CODE_LENGTH = 20

# Match statuses
MATCH_PENDING = "pending"
MATCH_LIVE = "live"
MATCH_COMPLETED = "completed"
MATCH_STATUSES = (MATCH_PENDING, MATCH_LIVE, MATCH_COMPLETED)

# Competition statuses
COMPETITION_COMPLETED = "completed"

# Leaderboard-related constants
GLOBAL_SCOPE = "global"
UNKNOWN_GAME = "unknown"
DEFAULT_LEADERBOARD_PAGE_SIZE = 50
