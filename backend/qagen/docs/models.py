"""
ドキュメント関連の型定義（データの形を明示）

【初心者向け】
- dataclass: フィールドだけ持つ軽量なクラス
- Document = 1ファイル分の生テキスト（処理中は変更しない）
- Chunk = 分割後の1ブロック。生成リクエストの単位
"""
from dataclasses import dataclass, field


def count_words(text: str) -> int:
    """空白区切りのトークン数（目標数の計算・既存ファイルの判定で必ずこれを使う）"""
    return len(text.split())


@dataclass(frozen=True)
class Document:
    """ドキュメント（1ファイル単位）"""
    source: str   # ファイルパス
    text: str     # 読み込んだ生テキスト

    @property
    def word_count(self) -> int:
        return count_words(self.text)


@dataclass(frozen=True)
class Chunk:
    """チャンク（ドキュメントまたは親チャンクの連続した部分文字列）"""
    text: str
    index: int = 0  # 親の中での順番（0始まり）
    word_count: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "word_count", count_words(self.text))
