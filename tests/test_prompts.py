from casegen.prompts import Prompts, build_test_case_prompt


class TestBuildTestCasePrompt:

    def test_exact_case_count(self):
        prompt = build_test_case_prompt("ログイン画面", cases=5)

        assert "Generate exactly 5 test cases." in prompt
        assert "concise set" not in prompt

    def test_concise_set_without_count(self):
        prompt = build_test_case_prompt("ログイン画面")

        assert "Generate a concise set of the most important test cases." in prompt
        assert "Generate exactly" not in prompt

    def test_lists_identifiers_when_supplied(self):
        prompt = build_test_case_prompt("desc", issue_ids=["ENG-1", "ENG-2"])

        assert "Descriptions are combined from 2 Linear tickets: ENG-1, ENG-2." in prompt
        assert "Cover scenarios across all of them." in prompt

    def test_single_identifier_is_singular(self):
        prompt = build_test_case_prompt("desc", issue_ids=["ENG-1"])

        assert "from 1 Linear ticket: ENG-1." in prompt

    def test_single_description_hint_without_identifiers(self):
        prompt = build_test_case_prompt("desc")

        assert "Use the Linear ticket description below" in prompt

    def test_output_contract(self):
        prompt = build_test_case_prompt("desc")

        assert "CSV rows only (no header)" in prompt
        assert "項目, ユーザーロール（管理者かユーザー）, 操作手順, 期待結果" in prompt
        assert "Role must be one of: 管理者, ユーザー, 全員." in prompt
        assert "Do not add numbering, bullets, or extra commentary." in prompt
        assert "Escape commas and quotes per CSV rules if needed." in prompt

    def test_description_is_trimmed_and_last(self):
        prompt = build_test_case_prompt("  {braces} stay literal \n\n")

        assert prompt.endswith("Description:\n{braces} stay literal")

    def test_system_prompt_asks_for_japanese_csv(self):
        system_prompt = Prompts.get_test_case_system_prompt()

        assert "Japanese" in system_prompt
        assert "CSV" in system_prompt
