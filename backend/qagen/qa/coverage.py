"""
Q&A生成の段階的分割ロジック（目標数に達するまで細かく分割して再生成）

【初心者向け】
- まずチャンク全体で生成する（文脈が切れないので品質が高い）
- 目標数に届かなければ見出しごとに分割して、各部分で生成し合計する
- それでも届かなければ段落ごとに分割して同じことをする
- 各部分の目標数は、親チャンクの目標数を語数の比率で配分（切り上げ）。届いたかの判定に使う
- LLMに要求する数は、その部分の語数から計算した generation_target（最低4問）
- 部分ごとの失敗はログに残してスキップ（0問として扱う）。他の部分は続行する
- 最後まで届かなければ、一番多く取れた段階の結果を返す
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence

from qagen.core.errors import GenerationFailure
from qagen.docs.chunker import split_by_headings, split_by_paragraphs, split_whole
from qagen.docs.models import Chunk, count_words
from qagen.llm.base import LLMClient
from qagen.qa.attempt import generate_qa_with_llm
from qagen.qa.observer import GenerationObserver, LoggingObserver
from qagen.qa.targets import estimate, proportional_target
from qagen.schemas.qa import QAItem

# ロガー設定
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoverageLevel:
    """分割の段階（名前・分割関数・分割が1件以下なら飛ばすか）"""
    name: str
    splitter: Callable[[str], List[Chunk]]
    requires_split: bool = True


# 試す順番（粗い → 細かい）
DEFAULT_LEVELS: tuple[CoverageLevel, ...] = (
    CoverageLevel("whole", split_whole, requires_split=False),
    CoverageLevel("heading", split_by_headings),
    CoverageLevel("paragraph", split_by_paragraphs),
)


class CoverageController:
    """
    段階的分割でチャンクのQ&Aを集める

    Args:
        client: LLMクライアント
        observer: 進捗通知先（デフォルト: LoggingObserver）
        levels: 試す分割段階（デフォルト: whole → heading → paragraph）
        max_attempts / retry_delay_sec: generate_qa_with_llm にそのまま渡す
    """

    def __init__(
        self,
        client: LLMClient,
        observer: GenerationObserver | None = None,
        levels: Sequence[CoverageLevel] = DEFAULT_LEVELS,
        max_attempts: int | None = None,
        retry_delay_sec: float | None = None,
    ):
        self.client = client
        self.observer = observer or LoggingObserver()
        self.levels = tuple(levels)
        self.max_attempts = max_attempts
        self.retry_delay_sec = retry_delay_sec

    async def run_level(self, level: CoverageLevel, text: str, target: int) -> list[QAItem] | None:
        """
        1段階分の生成（分割 → 各部分で生成 → 合計）

        Returns:
            集めたQAItemのリスト。分割できずこの段階を飛ばした場合は None
        """
        chunks = level.splitter(text)
        if level.requires_split and len(chunks) <= 1:
            logger.info(f"[QA:LEVEL] {level.name} では分割できないためスキップ")
            return None

        self.observer.level_started(level.name, len(chunks))
        parent_words = count_words(text)
        collected: list[QAItem] = []

        for chunk in chunks:
            share = chunk.word_count / parent_words if parent_words else 1.0
            sub_target = proportional_target(target, chunk.word_count, parent_words)
            request_count = estimate(chunk.word_count).generation_target
            try:
                items = await generate_qa_with_llm(
                    chunk.text,
                    request_count,
                    self.client,
                    observer=self.observer,
                    max_attempts=self.max_attempts,
                    retry_delay_sec=self.retry_delay_sec,
                )
            except GenerationFailure as e:
                self.observer.subchunk_finished(
                    level.name, chunk.index, len(chunks), sub_target, share, None, error=e
                )
                continue

            self.observer.subchunk_finished(
                level.name, chunk.index, len(chunks), sub_target, share, len(items)
            )
            collected.extend(items)

        self.observer.level_finished(level.name, len(collected), target)
        return collected

    async def cover(self, text: str, target: int) -> list[QAItem]:
        """
        目標数に届くまで段階的に分割して生成する

        Args:
            text: チャンクのテキスト
            target: 目標Q&A数

        Returns:
            目標に届いた段階の結果。どの段階でも届かなければ最も多かった段階の結果
            （同数なら粗い段階を優先）
        """
        best: list[QAItem] = []

        for level in self.levels:
            items = await self.run_level(level, text, target)
            if items is None:
                continue
            if len(items) >= target:
                return items
            if len(items) > len(best):
                best = items

        self.observer.coverage_exhausted(len(best), target)
        return best
