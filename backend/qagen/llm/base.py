"""
LLMアダプタ層の基底定義（抽象インターフェース・例外）

【初心者向け】
- LLMClient: Protocol。Ollama 等の実装が chat(messages) を提供する約束
- BackendError / LLMTimeoutError / EnvelopeParseError: LLM 呼び出し失敗時に raise。
  qagen.qa.attempt で捕捉して再試行する
"""
from typing import Protocol, List, Dict, Any


class LLMClient(Protocol):
    """
    LLMクライアントのインターフェース

    各LLM実装はこのProtocolに準拠する（テストでは偽物のクライアントを差し込む）
    """

    async def chat(
        self,
        messages: List[Dict[str, str]],
        response_format: Dict[str, Any] | None = None,
    ) -> str:
        """
        チャット形式でLLMに問い合わせ、メッセージ本文を取得

        Args:
            messages: メッセージリスト（[{"role": "system", "content": "..."}, ...]）
            response_format: 返答を制約するJSONスキーマ（任意）

        Returns:
            LLMからのメッセージ本文（未修復のテキスト）

        Raises:
            BackendError: 非成功ステータス・通信エラー時
            EnvelopeParseError: レスポンスの外枠が解釈できない時
        """
        ...


class LLMError(Exception):
    """LLM関連の基底例外"""
    pass


class BackendError(LLMError):
    """LLM呼び出しのHTTPエラー・通信エラー"""
    pass


class LLMTimeoutError(BackendError):
    """LLM呼び出しのタイムアウトエラー"""
    pass


class EnvelopeParseError(LLMError):
    """レスポンスの外枠（{"message": {"content": ...}}）が解釈できない"""
    pass
