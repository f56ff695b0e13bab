"""Ticket blueprint."""

from flask import Blueprint

bp = Blueprint("ticket", __name__, url_prefix="/tickets")

from . import routes  # noqa: E402, F401
from .models import IssuedTicket, Ticket  # noqa: E402
from .services import TicketService  # noqa: E402

__all__ = ["IssuedTicket", "Ticket", "TicketService", "routes"]
