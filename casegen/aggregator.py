from typing import List
import logging

from .linear_client import LinearClient
from .models import AggregationResult, LookupFailure
from .ticket_resolver import IssueNotFoundError, TicketResolver

logger = logging.getLogger(__name__)

DESCRIPTION_SEPARATOR = "\n\n---\n\n"


class IssueAggregator:
    """
    Resolve a batch of identifiers into one combined description.

    The batch is all-or-nothing: a single unresolved identifier fails the
    whole batch and the resolved tickets are discarded, so test cases are
    never generated from an incomplete ticket set.
    """

    def __init__(self, api_key: str, api_url: str, timeout: float = 30.0,
                 error_detail_max_length: int = 200):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.error_detail_max_length = error_detail_max_length

    def _create_client(self) -> LinearClient:
        return LinearClient(
            api_key=self.api_key,
            api_url=self.api_url,
            timeout=self.timeout,
            error_detail_max_length=self.error_detail_max_length
        )

    def aggregate(self, identifiers: List[str]) -> AggregationResult:
        descriptions: List[str] = []
        resolved_ids: List[str] = []
        failures: List[LookupFailure] = []

        with self._create_client() as client:
            resolver = TicketResolver(client)
            for identifier in identifiers:
                try:
                    descriptions.append(resolver.fetch_description(identifier))
                    resolved_ids.append(identifier)
                except IssueNotFoundError as e:
                    logger.warning(f"❌ Could not resolve {identifier}: {e} (detail: {e.detail})")
                    failures.append(LookupFailure(identifier=identifier, message=str(e), detail=e.detail))

        return self.build_result(descriptions, resolved_ids, failures)

    @staticmethod
    def build_result(descriptions: List[str], resolved_ids: List[str],
                     failures: List[LookupFailure]) -> AggregationResult:
        """Apply the all-or-nothing policy to per-identifier outcomes"""
        if not descriptions:
            first_failure = failures[0].message if failures else "Unknown error."
            return AggregationResult(
                success=False,
                failures=failures,
                error=f"Failed to fetch Linear description: {first_failure}"
            )

        if failures:
            failed_ids = ", ".join(f.identifier for f in failures)
            return AggregationResult(
                success=False,
                resolved_ids=resolved_ids,
                failures=failures,
                error=f"Failed to fetch Linear description for: {failed_ids}. {failures[0].message}"
            )

        logger.info(f"Combined descriptions from {len(resolved_ids)} Linear ticket(s): {', '.join(resolved_ids)}")
        return AggregationResult(
            success=True,
            description=DESCRIPTION_SEPARATOR.join(descriptions),
            resolved_ids=resolved_ids
        )
