"""
テスト共通設定（偽のLLMクライアントとヘルパー）
"""
import json
import sys
from pathlib import Path

import pytest

# qagen モジュールをインポート可能にする
sys.path.insert(0, str(Path(__file__).parent))

from qagen.qa.observer import LoggingObserver


def qa_payload(count: int, prefix: str = "Q") -> str:
    """{"questions": [...]} 形式のレスポンス本文を作る"""
    return json.dumps({
        "questions": [
            {"question": f"{prefix}{i}?", "answer": f"A{i}"}
            for i in range(1, count + 1)
        ]
    })


class FakeLLMClient:
    """
    LLMClient の偽物

    responder(content) が返す str をそのまま本文として返す。Exception を返すと raise する。
    呼び出しごとの user メッセージと response_format を calls に記録する。
    """

    def __init__(self, responder):
        self.responder = responder
        self.calls = []

    async def chat(self, messages, response_format=None):
        content = messages[-1]["content"]
        self.calls.append({"messages": messages, "content": content, "response_format": response_format})
        result = self.responder(content)
        if isinstance(result, Exception):
            raise result
        return result


class RecordingObserver(LoggingObserver):
    """イベントを記録しつつログにも出す observer"""

    def __init__(self):
        self.events = []

    def attempt_failed(self, attempt, max_attempts, error, raw=None, repaired=None):
        self.events.append(("attempt_failed", attempt, type(error).__name__, raw, repaired))
        super().attempt_failed(attempt, max_attempts, error, raw=raw, repaired=repaired)

    def level_finished(self, level, received, target):
        self.events.append(("level_finished", level, received, target))
        super().level_finished(level, received, target)

    def subchunk_finished(self, level, index, total, target, share, received, error=None):
        self.events.append(("subchunk_finished", level, index, target, received, error is not None))
        super().subchunk_finished(level, index, total, target, share, received, error=error)

    def existing_checked(self, path, count, min_acceptable, reused):
        self.events.append(("existing_checked", count, min_acceptable, reused))
        super().existing_checked(path, count, min_acceptable, reused)

    def of(self, name):
        return [e for e in self.events if e[0] == name]


@pytest.fixture
def observer():
    return RecordingObserver()
