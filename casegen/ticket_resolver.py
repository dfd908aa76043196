"""
Ticket Resolver
Turns one canonical identifier into ticket text by trying lookup strategies in order.
"""
from typing import Callable, List, Optional
import logging

from .identifiers import split_identifier
from .linear_client import LinearAPIError, LinearClient
from .models import ResolvedTicket

logger = logging.getLogger(__name__)

ISSUE_NOT_FOUND_MESSAGE = "Issue not found. Check the identifier (e.g., ENG-123) or the issue ID from the URL."

LookupStrategy = Callable[[LinearClient, str], Optional[ResolvedTicket]]


class IssueNotFoundError(Exception):
    """Raised when no lookup strategy finds the issue"""

    def __init__(self, identifier: str, detail: Optional[str] = None):
        super().__init__(ISSUE_NOT_FOUND_MESSAGE)
        self.identifier = identifier
        self.detail = detail


def lookup_by_id(client: LinearClient, identifier: str) -> Optional[ResolvedTicket]:
    """Treat the identifier as an opaque issue id"""
    return client.get_issue_by_id(identifier)


def lookup_by_team_and_number(client: LinearClient, identifier: str) -> Optional[ResolvedTicket]:
    """Resolve ``TEAM-NUMBER`` through the team's id, then the issue number"""
    parsed = split_identifier(identifier)
    if not parsed:
        return None
    team_key, number = parsed

    team_id = client.get_team_id(team_key)
    if not team_id:
        logger.info(f"No Linear team with key {team_key}")
        return None
    return client.get_issue_by_number(team_id, number)


DEFAULT_STRATEGIES: List[LookupStrategy] = [lookup_by_id, lookup_by_team_and_number]


class TicketResolver:
    """Resolve an identifier with the first strategy that returns an issue"""

    def __init__(self, client: LinearClient, strategies: Optional[List[LookupStrategy]] = None):
        self.client = client
        self.strategies = strategies if strategies is not None else list(DEFAULT_STRATEGIES)

    def resolve(self, identifier: str) -> ResolvedTicket:
        """
        Resolve an identifier to a ticket.

        A failing strategy (transport or GraphQL error) is logged and the next
        one is tried; only the final outcome is reported.

        Raises:
            IssueNotFoundError: when no strategy returns an issue
        """
        last_error = None
        for strategy in self.strategies:
            try:
                ticket = strategy(self.client, identifier)
            except LinearAPIError as e:
                logger.warning(f"Lookup {strategy.__name__} failed for {identifier}: {e}")
                last_error = str(e)
                continue
            if ticket is not None:
                logger.info(f"✅ Resolved {identifier} via {strategy.__name__}")
                return ticket

        raise IssueNotFoundError(identifier, detail=last_error)

    def fetch_description(self, identifier: str) -> str:
        """Heading and description text for an identifier"""
        return self.resolve(identifier).text
