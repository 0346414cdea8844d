"""
LLMアダプタ層

【初心者向け】
- LLMClientインターフェースを実装したクライアントを提供
- 現在の実装は Ollama のみ
"""
from qagen.llm.base import LLMClient
from qagen.llm.ollama import get_ollama_client


def get_llm_client() -> LLMClient:
    """
    LLMクライアントを取得

    Returns:
        LLMClientインターフェースを実装したクライアント
    """
    return get_ollama_client()
