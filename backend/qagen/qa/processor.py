"""
ドキュメント単位のQ&A生成

流れ:
1. ドキュメントを読む
2. 全体の語数から目標数を計算
3. 既存のQ&Aファイルが min_acceptable 件以上あればそれを返す（LLMは呼ばない）
4. トップレベル見出しでセクションに分割
5. セクションごとに目標数を語数比で配分し、CoverageController で生成
6. 結果を順番通りに連結して1回だけ保存
"""
import logging
from dataclasses import dataclass
from pathlib import Path

from qagen.core.errors import QAError
from qagen.docs.chunker import split_into_sections
from qagen.docs.loader import load_text_file
from qagen.llm import get_llm_client
from qagen.llm.base import LLMClient
from qagen.qa.coverage import CoverageController
from qagen.qa.observer import GenerationObserver, LoggingObserver
from qagen.qa.store import QAStore
from qagen.qa.targets import YieldTargets, estimate, proportional_target
from qagen.schemas.qa import QAItem

# ロガー設定
logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """process_file の結果"""
    source: str
    items: list[QAItem]
    targets: YieldTargets
    reused: bool


class QAProcessor:
    """
    ドキュメントからQ&Aを生成するエントリーポイント

    Args:
        client: LLMクライアント（デフォルト: get_llm_client()）
        store: Q&Aストア（デフォルト: QAStore()）
        observer: 進捗通知先（デフォルト: LoggingObserver）
        max_attempts / retry_delay_sec: 生成リクエストの再試行設定（デフォルト: settings）
    """

    def __init__(
        self,
        client: LLMClient | None = None,
        store: QAStore | None = None,
        observer: GenerationObserver | None = None,
        max_attempts: int | None = None,
        retry_delay_sec: float | None = None,
    ):
        self.client = client or get_llm_client()
        self.observer = observer or LoggingObserver()
        self.store = store or QAStore(observer=self.observer)
        self.coverage = CoverageController(
            self.client,
            observer=self.observer,
            max_attempts=max_attempts,
            retry_delay_sec=retry_delay_sec,
        )

    async def process_file(self, file_path: str | Path) -> list[QAItem]:
        """ドキュメントのQ&Aを返す（必要なら生成して保存）"""
        result = await self.process(file_path)
        return result.items

    async def process(self, file_path: str | Path) -> ProcessResult:
        """
        process_file と同じ処理で、目標数や再利用したかどうかも返す

        Raises:
            PersistenceError: ドキュメントの読み込み・Q&Aファイルの読み書きに失敗した場合
        """
        document = load_text_file(Path(file_path))
        total_words = document.word_count
        targets = estimate(total_words, observer=self.observer)

        existing = self.store.load_if_sufficient(document.source, targets.min_acceptable)
        if existing is not None:
            return ProcessResult(source=document.source, items=existing, targets=targets, reused=True)

        all_items: list[QAItem] = []
        sections = split_into_sections(document.text)

        for section in sections:
            if not section.text.strip():
                continue

            section_target = proportional_target(
                targets.generation_target, section.word_count, total_words
            )
            self.observer.section_started(section.index, len(sections), section.word_count, section_target)

            try:
                items = await self.coverage.cover(section.text, section_target)
            except QAError as e:
                logger.error(f"セクション {section.index + 1} の処理に失敗（スキップ）: {type(e).__name__}: {e}")
                continue

            all_items.extend(items)
            logger.info(f"[QA:PROGRESS] これまでの合計: {len(all_items)}/{targets.generation_target}問")

        self.store.save(document.source, all_items)
        return ProcessResult(source=document.source, items=all_items, targets=targets, reused=False)
