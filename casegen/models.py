from typing import List, Optional
from pydantic import BaseModel, Field

CSV_HEADER = "項目,ユーザーロール（管理者かユーザー）,操作手順,期待結果"


class Credentials(BaseModel):
    """Resolved credential bundle passed into the pipeline"""
    openai_api_key: Optional[str] = None
    linear_api_key: Optional[str] = None


class ResolvedTicket(BaseModel):
    """Linear issue fields needed to describe a ticket"""
    identifier: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None

    @property
    def heading(self) -> str:
        return f"{self.identifier or ''} {self.title or ''}".strip()

    @property
    def text(self) -> str:
        """Heading and description separated by a blank line"""
        parts = [self.heading] if self.heading else []
        if self.description:
            parts.append(self.description)
        return "\n\n".join(parts)


class LookupFailure(BaseModel):
    """An identifier that could not be resolved"""
    identifier: str
    message: str
    detail: Optional[str] = None


class AggregationResult(BaseModel):
    """Outcome of resolving a batch of identifiers"""
    success: bool
    description: str = ""
    resolved_ids: List[str] = []
    failures: List[LookupFailure] = []
    error: Optional[str] = None


class GenerationRequest(BaseModel):
    """Validated parameters for one generation run"""
    identifiers: List[str] = []
    description: str = ""
    model: str = "gpt-4o-mini"
    cases: Optional[int] = Field(None, ge=1)


class CsvResult(BaseModel):
    """Generated test cases: fixed header plus normalized CSV rows"""
    header: str = CSV_HEADER
    csv: str = ""
