"""
Centralized Prompt Templates
All LLM prompts are defined here for better maintainability and consistency.
"""
from typing import List, Optional

from .system import SystemPrompts
from .test_generation import TestGenerationPrompts, CSV_COLUMNS, ROLE_VALUES


class Prompts:
    """Centralized prompt templates organized by category"""

    # ==========================================
    # SYSTEM PROMPTS
    # ==========================================

    @staticmethod
    def get_test_case_system_prompt() -> str:
        """Get system prompt for CSV test case generation"""
        return SystemPrompts.get_test_case_system_prompt()

    # ==========================================
    # TEST GENERATION PROMPTS
    # ==========================================

    @staticmethod
    def get_csv_test_case_prompt_template() -> str:
        """Get template for CSV test case generation"""
        return TestGenerationPrompts.get_csv_test_case_prompt_template()


def build_test_case_prompt(description: str, cases: Optional[int] = None,
                           issue_ids: Optional[List[str]] = None) -> str:
    """
    Build the user prompt for test case generation.

    Args:
        description: Ticket text (combined when several tickets were resolved) or typed description
        cases: Exact number of test cases to request, or None for a concise set
        issue_ids: Identifiers the description came from, used only as a coverage hint

    Returns:
        Prompt string ending with the trimmed description
    """
    case_hint = (
        TestGenerationPrompts.get_exact_count_hint(cases)
        if cases
        else TestGenerationPrompts.get_concise_count_hint()
    )
    tickets_hint = (
        TestGenerationPrompts.get_tickets_hint(issue_ids)
        if issue_ids
        else TestGenerationPrompts.get_single_description_hint()
    )

    return Prompts.get_csv_test_case_prompt_template().format(
        tickets_hint=tickets_hint,
        case_hint=case_hint,
        columns=", ".join(CSV_COLUMNS),
        roles=", ".join(ROLE_VALUES),
        description=description.strip()
    ).strip()


__all__ = ["Prompts", "SystemPrompts", "TestGenerationPrompts", "build_test_case_prompt"]
