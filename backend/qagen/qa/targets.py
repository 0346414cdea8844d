"""
目標Q&A数の計算

- base_goal: 10語あたり1問（最低2問）
- generation_target: base_goal + extra（extra = base_goal の25%、最低2問）。実際にリクエストする数
- min_acceptable: base_goal の80%（最低2問）。既存ファイルを再利用できるかの基準
"""
from dataclasses import dataclass

from qagen.qa.observer import GenerationObserver

WORDS_PER_QUESTION = 10
MIN_QUESTIONS = 2
# 比率は (分子, 分母) で持つ（0.8 * 35 = 28.000000000000004 のような誤差で切り上げがずれるため）
EXTRA_RATIO = (1, 4)
ACCEPTABLE_RATIO = (4, 5)


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


@dataclass(frozen=True)
class YieldTargets:
    """目標数（min_acceptable <= base_goal <= generation_target）"""
    base_goal: int
    generation_target: int
    min_acceptable: int

    @property
    def extra(self) -> int:
        return self.generation_target - self.base_goal


def estimate(word_count: int, observer: GenerationObserver | None = None) -> YieldTargets:
    """
    語数から目標数を計算する

    Args:
        word_count: 語数（count_words で数えた値）
        observer: 進捗通知先（任意）

    Returns:
        YieldTargets
    """
    base_goal = max(MIN_QUESTIONS, _ceil_div(max(word_count, 0), WORDS_PER_QUESTION))
    extra = max(MIN_QUESTIONS, _ceil_div(base_goal * EXTRA_RATIO[0], EXTRA_RATIO[1]))
    min_acceptable = max(MIN_QUESTIONS, _ceil_div(base_goal * ACCEPTABLE_RATIO[0], ACCEPTABLE_RATIO[1]))

    targets = YieldTargets(
        base_goal=base_goal,
        generation_target=base_goal + extra,
        min_acceptable=min_acceptable,
    )
    if observer is not None:
        observer.targets_computed(word_count, targets)
    return targets


def proportional_target(parent_target: int, sub_words: int, parent_words: int) -> int:
    """
    親の目標数を語数の比率で子チャンクに配分する（切り上げ、最低1問）
    """
    if parent_words <= 0:
        return max(1, parent_target)
    return max(1, _ceil_div(parent_target * sub_words, parent_words))
