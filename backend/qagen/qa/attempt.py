"""
LLM呼び出しロジック（1チャンク分の生成と再試行）

- 1回のリクエストで count 問を要求する
- 失敗（HTTPエラー・外枠のパース失敗・修復後のパース失敗・クライアントの想定外の例外）したら、固定の待機を挟んで再試行
- 最大試行回数を使い切ったら GenerationFailure
- 件数の過不足はここでは扱わない（coverage 側で判断する）
"""
import asyncio
import logging

from qagen.core.errors import GenerationFailure, SchemaParseError
from qagen.core.settings import settings
from qagen.llm.base import BackendError, EnvelopeParseError, LLMClient
from qagen.llm.prompt import QA_RESPONSE_SCHEMA, build_qa_generation_messages
from qagen.qa.observer import GenerationObserver, LoggingObserver
from qagen.qa.parser import parse_qa_json
from qagen.qa.repair import repair_json
from qagen.schemas.qa import QAItem

# ロガー設定
logger = logging.getLogger(__name__)


async def generate_qa_with_llm(
    text: str,
    count: int,
    client: LLMClient,
    observer: GenerationObserver | None = None,
    max_attempts: int | None = None,
    retry_delay_sec: float | None = None,
) -> list[QAItem]:
    """
    チャンクからQ&Aを生成する

    Args:
        text: チャンクのテキスト
        count: 要求するQ&Aの数
        client: LLMクライアント
        observer: 進捗通知先（デフォルト: LoggingObserver）
        max_attempts: 最大試行回数（デフォルト: settings.qa_max_attempts）
        retry_delay_sec: 再試行前の待機秒数（デフォルト: settings.qa_retry_delay_sec）

    Returns:
        パースしたQAItemのリスト（件数は count と一致するとは限らない）

    Raises:
        GenerationFailure: すべての試行が失敗した場合
    """
    observer = observer or LoggingObserver()
    max_attempts = max_attempts if max_attempts is not None else settings.qa_max_attempts
    retry_delay_sec = retry_delay_sec if retry_delay_sec is not None else settings.qa_retry_delay_sec

    messages = build_qa_generation_messages(text, count)
    last_error: Exception | None = None

    for attempt in range(1, max_attempts + 1):
        observer.request_started(count)
        raw_text = None
        repaired = None

        try:
            raw_text = await client.chat(messages, response_format=QA_RESPONSE_SCHEMA)
            repaired = repair_json(raw_text)
            items = parse_qa_json(repaired)
        except (BackendError, EnvelopeParseError, SchemaParseError) as e:
            last_error = e
        except Exception as e:
            logger.error(f"LLM呼び出しで予期しないエラー: {type(e).__name__}: {e}")
            last_error = BackendError(f"予期しないエラー: {type(e).__name__}: {e}")
        else:
            observer.attempt_succeeded(len(items), count)
            return items

        observer.attempt_failed(attempt, max_attempts, last_error, raw=raw_text, repaired=repaired)

        if attempt < max_attempts:
            await asyncio.sleep(retry_delay_sec)

    raise GenerationFailure(
        reason=f"{type(last_error).__name__}: {last_error}" if last_error else "no_attempts",
        attempts=max_attempts,
    )
