"""
プロンプト生成ロジック

- リリースノート/変更履歴を含むチャンクと、通常のドキュメントで指示文を切り替える
- どちらのモードでも返答の形（QA_RESPONSE_SCHEMA）は同じ
"""
from typing import Any, Dict, List

# リリースノートモードに切り替える見出し
RELEASE_NOTES_MARKERS = ("# Release Notes", "# Changelog")

# Ollama の format に渡すJSONスキーマ（{"questions": [{"question", "answer"}, ...]}）
QA_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["questions"],
    "properties": {
        "questions": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["question", "answer"],
                "properties": {
                    "question": {"type": "string"},
                    "answer": {"type": "string"},
                },
            },
        },
    },
}


def is_release_notes(text: str) -> bool:
    """チャンクがリリースノート/変更履歴の見出しを含むか"""
    return any(marker in text for marker in RELEASE_NOTES_MARKERS)


def build_qa_generation_messages(text: str, count: int) -> List[Dict[str, str]]:
    """
    Q&A生成用のメッセージリストを構築

    Args:
        text: チャンクのテキスト
        count: 要求するQ&Aの数

    Returns:
        LLM用メッセージリスト（[{"role": "system", "content": "..."}, ...]）
    """
    if is_release_notes(text):
        system_content = (
            "You are a helpful assistant that generates questions and answers about software release notes. "
            "Format your response as JSON. Keep answers concise and factual. "
            "Focus on the specific changes and improvements in this version."
        )
        instruction = (
            f"Generate exactly {count} unique questions and answers from these release notes. "
            "Focus on specific changes, features, and improvements. "
            "Format as JSON array with 'question' and 'answer' fields. "
            "Questions should be detailed and specific to the version mentioned in the notes."
        )
    else:
        system_content = (
            "You are a helpful assistant that generates questions and answers about technical documentation. "
            "Format your response as JSON. Keep answers concise and factual. "
            "Focus on the technical details and functionality being described."
        )
        instruction = (
            f"Generate exactly {count} unique questions and answers from this documentation. "
            "Focus on key concepts, features, and usage. "
            "Format as JSON array with 'question' and 'answer' fields."
        )

    return [
        {"role": "system", "content": system_content},
        {"role": "user", "content": f"{instruction}\nContent: {text}"},
    ]
