"""
Q&AのJSONパース
"""
import json
import logging

from pydantic import ValidationError

from qagen.core.errors import SchemaParseError
from qagen.schemas.qa import QAItem, QuestionResponse

# ロガー設定
logger = logging.getLogger(__name__)


def parse_qa_json(repaired_text: str) -> list[QAItem]:
    """
    修復済みテキストを {"questions": [{"question", "answer"}, ...]} としてパース

    件数はチェックしない（要求数より多くても少なくてもそのまま返す）。

    Args:
        repaired_text: repair_json 適用後のテキスト

    Returns:
        QAItemのリスト

    Raises:
        SchemaParseError: JSONとして読めない、または形が違う場合
    """
    try:
        data = json.loads(repaired_text)
    except json.JSONDecodeError as e:
        raise SchemaParseError(f"json_parse_error: {e}") from e

    try:
        parsed = QuestionResponse.model_validate(data)
    except ValidationError as e:
        raise SchemaParseError(f"json_validation_error: {e.error_count()}件のエラー: {e.errors()[0]['msg']}") from e

    return parsed.questions


def load_qa_lines(text: str) -> list[QAItem]:
    """
    JSONL（1行1件）を読む。壊れた行・形の違う行は読み飛ばす
    """
    items = []
    for line_no, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        try:
            items.append(QAItem.model_validate_json(line))
        except ValidationError as e:
            logger.warning(f"JSONL {line_no}行目を読み飛ばします: {e.error_count()}件のエラー")
    return items


def load_qa_array(text: str) -> list[QAItem]:
    """
    旧形式（JSON配列）を読む

    Raises:
        SchemaParseError: JSON配列として読めない場合
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaParseError(f"json_parse_error: {e}") from e

    if not isinstance(data, list):
        raise SchemaParseError("json_validation_error: 旧形式はJSON配列である必要があります")

    try:
        return [QAItem.model_validate(entry) for entry in data]
    except ValidationError as e:
        raise SchemaParseError(f"json_validation_error: {e.errors()[0]['msg']}") from e
