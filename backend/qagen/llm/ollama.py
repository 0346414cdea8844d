"""
Ollama LLMクライアント実装
"""
import json
import logging
from functools import lru_cache
from typing import List, Dict, Any

import httpx

from qagen.core.settings import settings
from qagen.llm.base import BackendError, EnvelopeParseError, LLMTimeoutError

# ロガー設定
logger = logging.getLogger(__name__)


def extract_ollama_text(raw: Any) -> str:
    """
    Ollama chat APIのレスポンスからメッセージ本文を取り出す

    対応形式:
    - dict["message"]["content"]（chat API）
    - dict["response"]（generate API、保険）

    Raises:
        EnvelopeParseError: どちらの形式でもない場合
    """
    if not isinstance(raw, dict):
        raise EnvelopeParseError(f"レスポンスがオブジェクトではありません: {type(raw).__name__}")

    message = raw.get("message")
    if isinstance(message, dict) and isinstance(message.get("content"), str):
        return message["content"]

    if isinstance(raw.get("response"), str):
        return raw["response"]

    raise EnvelopeParseError(f"message.content が見つかりません: keys={list(raw.keys())}")


class OllamaClient:
    """
    Ollama APIクライアント

    - httpx.AsyncClient で /api/chat を叩く
    - stream=False の一括応答
    - response_format を渡すと Ollama の format（JSONスキーマ）として送る
    """

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        timeout_sec: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Ollamaクライアントを初期化

        Args:
            base_url: OllamaのベースURL（デフォルト: settingsから取得）
            model: 使用するモデル名（デフォルト: settingsから取得）
            timeout_sec: タイムアウト秒数（デフォルト: settingsから取得）
            transport: httpxのトランスポート（テスト用）
        """
        self.base_url = (base_url or settings.ollama_base_url).rstrip("/")
        self.model = model or settings.ollama_model
        self.timeout_sec = timeout_sec or settings.ollama_timeout_sec
        self.transport = transport

        # APIエンドポイント
        self.chat_url = f"{self.base_url}/api/chat"

    async def chat(
        self,
        messages: List[Dict[str, str]],
        response_format: Dict[str, Any] | None = None,
    ) -> str:
        """
        チャット形式でOllamaに問い合わせ、メッセージ本文を取得

        Raises:
            LLMTimeoutError: タイムアウト時
            BackendError: HTTPエラーや接続エラー時
            EnvelopeParseError: レスポンスがJSONでない、または本文がない時
        """
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "stream": False,
        }
        if response_format is not None:
            payload["format"] = response_format

        try:
            async with httpx.AsyncClient(timeout=self.timeout_sec, transport=self.transport) as client:
                response = await client.post(self.chat_url, json=payload)
                response.raise_for_status()  # HTTPエラーを例外に変換
                response_text = response.text

        except httpx.TimeoutException as e:
            logger.error(f"Ollamaタイムアウト: {e}")
            raise LLMTimeoutError(f"Ollamaへのリクエストがタイムアウトしました（{self.timeout_sec}秒）")

        except httpx.HTTPStatusError as e:
            logger.error(f"Ollama HTTPエラー: {e.response.status_code} - {e.response.text}")
            raise BackendError(f"Ollama APIエラー: HTTP {e.response.status_code}: {e.response.text}")

        except httpx.RequestError as e:
            logger.error(f"Ollama接続エラー: {e}")
            raise BackendError(f"Ollamaへの接続に失敗しました: {str(e)}")

        except Exception as e:
            logger.error(f"Ollama予期しないエラー: {type(e).__name__}: {e}")
            raise BackendError(f"Ollama呼び出し中にエラーが発生しました: {type(e).__name__}: {e}")

        try:
            envelope = json.loads(response_text)
        except json.JSONDecodeError as e:
            raise EnvelopeParseError(f"レスポンスがJSONではありません: {e}; raw={response_text[:200]}")

        answer = extract_ollama_text(envelope)
        logger.info(f"Ollama回答取得成功: {len(answer)}文字")
        return answer


@lru_cache(maxsize=1)
def get_ollama_client() -> OllamaClient:
    """
    Ollamaクライアントのシングルトンインスタンスを取得（@lru_cacheで生成を抑える）
    """
    return OllamaClient()
