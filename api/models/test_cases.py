"""
Test Case Models
Request and response models for CSV test case generation endpoints
"""
import math
from pydantic import BaseModel, Field, validator
from typing import Optional, List, Union

from casegen.identifiers import parse_issue_inputs
from casegen.models import GenerationRequest, CSV_HEADER


class GenerateTestCasesRequest(BaseModel):
    """Request model for generating test cases from Linear tickets or a description"""
    issue_id: Optional[str] = Field(
        None,
        alias="issueId",
        description="Single Linear identifier, URL or issue id",
        example="ENG-123"
    )
    issue_ids: Optional[Union[str, List[str]]] = Field(
        None,
        alias="issueIds",
        description="Several identifiers as a list or one string separated by spaces, commas or semicolons",
        example="ENG-123, ENG-124"
    )
    description: Optional[str] = Field(
        None,
        description="Free-text description; when present Linear is not queried"
    )
    model: Optional[str] = Field(
        None,
        description="OpenAI model to use (default: gpt-4o-mini)",
        example="gpt-4o-mini"
    )
    cases: Optional[int] = Field(
        None,
        description="Exact number of test cases to generate (omit for a concise set)",
        example=10
    )
    linear_api_key: Optional[str] = Field(
        None,
        alias="linearApiKey",
        description="Linear API key overriding LINEAR_API_KEY"
    )
    openai_api_key: Optional[str] = Field(
        None,
        alias="openaiApiKey",
        description="OpenAI API key overriding OPENAI_API_KEY"
    )

    @validator('cases', pre=True)
    def coerce_cases(cls, v):
        # Anything that is not a positive finite number means "no explicit count"
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        if isinstance(v, float) and not math.isfinite(v):
            return None
        v = int(v)
        return v if v > 0 else None

    @validator('issue_id', 'description', 'model', 'linear_api_key', 'openai_api_key', pre=True)
    def ignore_non_strings(cls, v):
        return v if isinstance(v, str) else None

    @validator('issue_ids', pre=True)
    def keep_string_items(cls, v):
        if isinstance(v, list):
            return [item for item in v if isinstance(item, str)]
        return v if isinstance(v, str) else None

    def identifiers(self) -> List[str]:
        """issueIds takes priority over issueId"""
        raw = self.issue_ids if self.issue_ids is not None else self.issue_id
        return parse_issue_inputs(raw)

    def to_generation_request(self, default_model: str) -> GenerationRequest:
        return GenerationRequest(
            identifiers=self.identifiers(),
            description=(self.description or "").strip(),
            model=(self.model or "").strip() or default_model,
            cases=self.cases
        )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "issueIds": "ENG-123, ENG-124",
                "model": "gpt-4o-mini",
                "cases": 10
            }
        }


class TestCaseCsvResponse(BaseModel):
    """Generated test cases"""
    header: str = Field(CSV_HEADER, description="Fixed CSV header line")
    csv: str = Field(..., description="CSV rows without header, newline separated")


class ErrorResponse(BaseModel):
    """Error envelope returned for 4xx/5xx responses"""
    error: str = Field(..., description="User-facing error message")


class EnvStatusResponse(BaseModel):
    """Whether default credentials are configured in the environment"""
    hasOpenAI: bool
    hasLinear: bool
