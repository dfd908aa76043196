"""
System Prompts
System prompts for LLM operations.
"""


class SystemPrompts:
    """System prompts for LLM providers"""

    @staticmethod
    def get_test_case_system_prompt() -> str:
        """Get system prompt for CSV test case generation"""
        return "You are a QA specialist who writes succinct, high-quality test cases in Japanese. Always follow the requested CSV format."
