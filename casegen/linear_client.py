import json
import requests
from pydantic import ValidationError
from typing import Dict, Any, Optional
import logging

from .models import ResolvedTicket

logger = logging.getLogger(__name__)

LINEAR_GRAPHQL_URL = "https://api.linear.app/graphql"

ISSUE_BY_ID_QUERY = """
query IssueById($id: String!) {
  issue(id: $id) {
    identifier
    title
    description
  }
}
"""

TEAM_BY_KEY_QUERY = """
query TeamByKey($teamKey: String!) {
  teams(filter: { key: { eq: $teamKey } }, first: 1) {
    nodes {
      id
    }
  }
}
"""

ISSUE_BY_NUMBER_QUERY = """
query IssueByNumber($teamId: String!, $number: Int!) {
  issues(
    filter: { number: { eq: $number }, team: { id: { eq: $teamId } } }
    first: 1
  ) {
    nodes {
      identifier
      title
      description
    }
  }
}
"""


class LinearAPIError(Exception):
    """Raised when a Linear request fails or returns GraphQL errors"""
    pass


class LinearClient:
    """Minimal Linear GraphQL client for reading issues"""

    def __init__(self, api_key: str, api_url: str = LINEAR_GRAPHQL_URL, timeout: float = 30.0,
                 error_detail_max_length: int = 200):
        self.api_url = api_url
        self.timeout = timeout
        self.error_detail_max_length = error_detail_max_length
        self.session = requests.Session()
        # Linear personal API keys are sent as-is, without a Bearer prefix
        self.session.headers.update({
            'Authorization': api_key,
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        })

    def _truncate(self, text: str) -> str:
        return text[:self.error_detail_max_length]

    def execute(self, query: str, variables: Dict[str, Any], operation: str = "request") -> Dict[str, Any]:
        """
        Run a GraphQL query and return its ``data`` object.

        Raises:
            LinearAPIError: on network failure, non-2xx status, unparseable
                or non-object body, or a top-level ``errors`` array
        """
        try:
            response = self.session.post(
                self.api_url,
                json={'query': query, 'variables': variables},
                timeout=self.timeout
            )
        except (requests.exceptions.RequestException, UnicodeError) as e:
            # UnicodeError: the API key cannot be sent as a Latin-1 header
            raise LinearAPIError(f"Linear {operation} failed: {self._truncate(str(e))}") from e

        if not response.ok:
            error_text = self._truncate(response.text or "")
            message = f"Linear {operation} failed with status {response.status_code}"
            if error_text:
                message = f"{message}: {error_text}"
            raise LinearAPIError(message)

        try:
            payload = response.json()
        except ValueError as e:
            raise LinearAPIError(f"Linear {operation} returned invalid JSON") from e

        if not isinstance(payload, dict):
            raise LinearAPIError(f"Linear {operation} returned an unexpected payload")

        if payload.get('errors'):
            raise LinearAPIError(self._truncate(json.dumps(payload['errors'], ensure_ascii=False)))

        data = payload.get('data') or {}
        if not isinstance(data, dict):
            raise LinearAPIError(f"Linear {operation} returned an unexpected payload")
        return data

    @staticmethod
    def _first_node(data: Dict[str, Any], connection: str, operation: str) -> Optional[Dict[str, Any]]:
        """First element of ``data[connection].nodes``, or None when empty"""
        container = data.get(connection) or {}
        nodes = container.get('nodes') if isinstance(container, dict) else None
        if not nodes:
            return None
        if not isinstance(nodes, list) or not isinstance(nodes[0], dict):
            raise LinearAPIError(f"Linear {operation} returned an unexpected payload")
        return nodes[0]

    @staticmethod
    def _to_ticket(node: Dict[str, Any], operation: str) -> ResolvedTicket:
        if not isinstance(node, dict):
            raise LinearAPIError(f"Linear {operation} returned an unexpected payload")
        try:
            return ResolvedTicket(**node)
        except ValidationError as e:
            raise LinearAPIError(f"Linear {operation} returned an unexpected issue shape") from e

    def get_issue_by_id(self, issue_id: str) -> Optional[ResolvedTicket]:
        """Fetch an issue by its id (UUID or identifier accepted by Linear)"""
        data = self.execute(ISSUE_BY_ID_QUERY, {'id': issue_id}, operation="request")
        issue = data.get('issue')
        if not issue:
            return None
        return self._to_ticket(issue, "request")

    def get_team_id(self, team_key: str) -> Optional[str]:
        """Resolve a team key such as ``ENG`` to the team's internal id"""
        data = self.execute(TEAM_BY_KEY_QUERY, {'teamKey': team_key}, operation="team lookup")
        node = self._first_node(data, 'teams', "team lookup")
        if node is None:
            return None
        return node.get('id')

    def get_issue_by_number(self, team_id: str, number: int) -> Optional[ResolvedTicket]:
        """Fetch the issue with the given number inside a team"""
        data = self.execute(ISSUE_BY_NUMBER_QUERY, {'teamId': team_id, 'number': number},
                            operation="issue lookup")
        node = self._first_node(data, 'issues', "issue lookup")
        if node is None:
            return None
        return self._to_ticket(node, "issue lookup")

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
