"""
Test case generation pipeline.

Validates a request, resolves Linear tickets when no description was typed,
builds the prompt, runs one completion and normalizes the CSV output.
"""
from typing import Optional
import logging
import time

from .aggregator import IssueAggregator
from .config import Config
from .llm_client import EmptyCompletionError, LLMClient
from .models import Credentials, CsvResult, GenerationRequest, CSV_HEADER
from .output_normalizer import clean_model_output, find_malformed_rows
from .prompts import build_test_case_prompt

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Base exception for pipeline failures; carries the HTTP status to report"""
    status_code = 500


class GenerationInputError(GenerationError):
    """Missing input or credentials; nothing was sent over the network"""
    status_code = 400


class IssueLookupError(GenerationError):
    """One or more Linear identifiers could not be resolved"""
    status_code = 400


class CompletionError(GenerationError):
    """The completion service failed or returned nothing"""
    status_code = 500


class TestCaseGenerator:
    """Sequences ticket resolution, prompting, completion and normalization"""

    __test__ = False

    def __init__(self, config: Config):
        self.config = config

    def validate(self, request: GenerationRequest, credentials: Credentials) -> None:
        """
        Reject requests that cannot be served.

        Raises:
            GenerationInputError: with the message to show the user
        """
        if not credentials.openai_api_key:
            raise GenerationInputError("OPENAI_API_KEY is required (env or request payload).")

        if not request.description.strip():
            if not request.identifiers:
                raise GenerationInputError("issueId(s) or description is required.")
            if not credentials.linear_api_key:
                raise GenerationInputError("LINEAR_API_KEY is required to fetch from Linear.")

    def create_aggregator(self, linear_api_key: str) -> IssueAggregator:
        return IssueAggregator(
            api_key=linear_api_key,
            api_url=self.config.linear_api_url,
            timeout=self.config.linear_timeout,
            error_detail_max_length=self.config.error_detail_max_length
        )

    def create_llm_client(self, openai_api_key: str, model: Optional[str]) -> LLMClient:
        return LLMClient(self.config.get_llm_config(api_key=openai_api_key, model=model))

    def resolve_description(self, request: GenerationRequest, credentials: Credentials) -> str:
        """Typed description wins; otherwise combine the resolved tickets"""
        description = request.description.strip()
        if description:
            logger.info("Using the supplied description, skipping Linear lookup")
            return description

        logger.info(f"🔍 Resolving {len(request.identifiers)} Linear identifier(s): {', '.join(request.identifiers)}")
        result = self.create_aggregator(credentials.linear_api_key).aggregate(request.identifiers)
        if not result.success:
            raise IssueLookupError(result.error)
        return result.description

    def generate(self, request: GenerationRequest, credentials: Credentials) -> CsvResult:
        """
        Run the whole pipeline for one request.

        Raises:
            GenerationInputError: invalid input or missing credentials
            IssueLookupError: a Linear identifier could not be resolved
            CompletionError: the completion service failed or returned no text
        """
        start_time = time.time()
        self.validate(request, credentials)

        description = self.resolve_description(request, credentials)
        prompt = build_test_case_prompt(
            description,
            cases=request.cases,
            issue_ids=request.identifiers or None
        )

        try:
            llm_client = self.create_llm_client(credentials.openai_api_key, request.model)
            raw_content = llm_client.generate_content(prompt)
        except EmptyCompletionError as e:
            raise CompletionError(str(e)) from e
        except Exception as e:
            logger.error(f"Completion failed: {e}")
            detail = str(e)[:self.config.error_detail_max_length]
            raise CompletionError(f"Failed to generate test cases: {detail}") from e

        csv_body = clean_model_output(raw_content)
        malformed = find_malformed_rows(csv_body)
        if malformed:
            logger.warning(f"⚠️ {len(malformed)} generated row(s) do not have 4 columns: {malformed[:5]}")

        row_count = len(csv_body.splitlines()) if csv_body else 0
        logger.info(f"✅ Generated {row_count} test case row(s) in {time.time() - start_time:.2f}s")
        return CsvResult(header=CSV_HEADER, csv=csv_body)
