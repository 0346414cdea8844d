"""
LLM出力のJSON修復テスト
"""
import json

import pytest

from qagen.qa.repair import (
    collapse_newlines,
    remove_trailing_commas,
    repair_json,
    repair_truncation,
    rewrite_backslashes,
    strip_code_fence,
)

VALID = '{"questions":[{"question":"Q1","answer":"A1"}]}'


def test_strip_code_fence_requires_both_markers():
    assert strip_code_fence("```json\n" + VALID + "\n```") == VALID
    assert strip_code_fence("```json" + VALID + "```") == VALID
    opened_only = "```json\n" + VALID
    assert strip_code_fence(opened_only) == opened_only
    assert strip_code_fence(VALID) == VALID


def test_strip_code_fence_removes_nested_fences():
    assert strip_code_fence("```json\n```text\nbody```\n```") == "body"
    assert strip_code_fence("```json\n```json\n" + VALID + "\n```\n```") == VALID


def test_truncation_recovers_last_complete_pair():
    truncated = '{"questions":[{"question":"Q1","answer":"A1"},{"question":"Q2","ans'
    repaired = repair_json(truncated)
    assert json.loads(repaired) == {"questions": [{"question": "Q1", "answer": "A1"}]}


def test_truncation_inside_last_answer():
    truncated = (
        '{"questions":[{"question":"Q1","answer":"A1"},'
        '{"question":"Q2","answer":"A2"},{"question":"Q3","answer":"half an ans'
    )
    data = json.loads(repair_json(truncated))
    assert [q["question"] for q in data["questions"]] == ["Q1", "Q2"]


def test_truncation_ignores_brackets_inside_strings():
    truncated = '{"questions":[{"question":"What is {x}?","answer":"[1, 2]"},{"question":"Q2","answer":"A'
    data = json.loads(repair_json(truncated))
    assert data == {"questions": [{"question": "What is {x}?", "answer": "[1, 2]"}]}


def test_truncation_without_complete_pair_gives_empty_list():
    truncated = '{"questions":[{"question":"Q1","answer":"A1'
    assert json.loads(repair_json(truncated)) == {"questions": []}


def test_truncation_falls_back_to_double_brace():
    text = '{"meta":{"a":{"b":1}}, "tail": tru'
    assert repair_truncation(text) == '{"meta":{"a":{"b":1}}}'


def test_truncation_leaves_unrepairable_text():
    assert repair_truncation("not json at all") == "not json at all"
    assert repair_truncation(VALID) == VALID


def test_trailing_comma_removed():
    text = '{"questions":[{"question":"Q1","answer":"A1"},]}'
    assert remove_trailing_commas(text) == VALID
    assert remove_trailing_commas('{"a": [1, 2 ,\n ]}') == '{"a": [1, 2 \n ]}'
    assert remove_trailing_commas('[1,,]') == '[1]'


def test_collapse_newlines():
    assert collapse_newlines('{\n  "a": 1,\n  "b": 2\n}') == '{ "a": 1, "b": 2 }'
    assert collapse_newlines("a  b") == "a  b"


def test_rewrite_backslashes_keeps_escaped_quotes():
    assert rewrite_backslashes(r'"C:\Users\me"') == '"C:/Users/me"'
    assert rewrite_backslashes(r'"say \"hi\""') == r'"say \"hi\""'
    assert rewrite_backslashes("tail\\") == "tail/"


def test_rewrite_backslashes_is_lossy_for_other_escapes():
    # 既知の制限: \n や \t のエスケープは / に置き換わる
    assert rewrite_backslashes(r'"line\nbreak"') == '"line/nbreak"'


def test_full_pipeline_on_messy_reply():
    raw = (
        "```json\n"
        "{\n"
        '  "questions": [\n'
        '    {"question": "Where is it?", "answer": "In C:\\\\data\\\\file"},\n'
        "  ]\n"
        "}\n"
        "```"
    )
    data = json.loads(repair_json(raw))
    assert data["questions"][0]["question"] == "Where is it?"
    assert len(data["questions"]) == 1


def test_repair_never_raises_on_garbage():
    for raw in ["", "}", "]]]", '"', "```", "\\", None]:
        assert isinstance(repair_json(raw), str)


@pytest.mark.parametrize("raw", [
    VALID,
    "```json\n" + VALID + "\n```",
    '{"questions":[{"question":"Q1","answer":"A1"},{"question":"Q2","ans',
    '{"questions":[{"question":"Q1","answer":"A1',
    '{"questions":[\n{"question":"Q1","answer":"A1"},\n]}',
    '[{"question":"Q1","answer":"A1"},{"question":"Q2","answer":"A',
    '{"meta":{"a":{"b":1},}, "tail": tru',
    r'{"questions":[{"question":"path \"C:\tmp\"","answer":"x\ny"}]}',
    "plain text reply",
    "```json\n```text\nbody```\n```",
    "",
])
def test_repair_is_idempotent(raw):
    once = repair_json(raw)
    assert repair_json(once) == once
