"""
Models Package
Export all API models for easy imports
"""
from .test_cases import (
    GenerateTestCasesRequest,
    TestCaseCsvResponse,
    ErrorResponse,
    EnvStatusResponse
)

__all__ = [
    "GenerateTestCasesRequest",
    "TestCaseCsvResponse",
    "ErrorResponse",
    "EnvStatusResponse",
]
