"""
プロンプト生成のテスト
"""
from qagen.llm.prompt import build_qa_generation_messages, is_release_notes


def test_documentation_mode():
    messages = build_qa_generation_messages("Install the tool.", 4)

    assert [m["role"] for m in messages] == ["system", "user"]
    assert "technical documentation" in messages[0]["content"]
    assert messages[1]["content"].startswith("Generate exactly 4 unique questions")
    assert messages[1]["content"].endswith("\nContent: Install the tool.")


def test_release_notes_mode():
    text = "# Release Notes\n## 2.0\n- New parser\n"
    assert is_release_notes(text)

    messages = build_qa_generation_messages(text, 3)

    assert "release notes" in messages[0]["content"]
    assert "Generate exactly 3 unique questions and answers from these release notes" in messages[1]["content"]


def test_changelog_heading_is_release_notes():
    assert is_release_notes("intro\n# Changelog\n")
    assert not is_release_notes("# Guide\nNothing about changes.")
