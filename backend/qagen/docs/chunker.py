"""
ドキュメントチャンク分割モジュール（長文を生成リクエスト用の塊に分割）

【初心者向け】
- チャンク = 1回の生成リクエストに渡すテキストの単位
- 分割方法は4種類:
  - whole: 分割しない（全文を1チャンク）
  - section: トップレベル見出し（#, ##）で分割。ドキュメント全体の最初の分割に使う
  - heading: すべての見出し行（# で始まる行）で分割
  - paragraph: 2行以上連続する空行で分割（空行1行では切らない）
- どの方法でも、チャンクを順に連結すると元のテキストに完全に戻る
- 空白だけのチャンクは作らない（前後のチャンクに吸収する）
"""
import re
from typing import Callable, List, Literal

from qagen.docs.models import Chunk

# 分割方法の型
Strategy = Literal["whole", "section", "heading", "paragraph"]

# 見出しパターン（行頭の # 1つ以上）
HEADING_PATTERN = re.compile(r"^#")
# トップレベル見出しパターン（行頭の # または ## の後に空白）
SECTION_PATTERN = re.compile(r"^#{1,2}\s")


def _to_chunks(parts: List[str], text: str) -> List[Chunk]:
    """分割結果をChunkに変換（0件なら全文を1チャンクとして返す）"""
    if not parts:
        return [Chunk(text=text, index=0)]
    return [Chunk(text=part, index=i) for i, part in enumerate(parts)]


def _split_at_lines(text: str, starts_chunk: Callable[[str], bool]) -> List[Chunk]:
    """
    starts_chunk が True を返す行の直前でテキストを切る

    直前までの内容が空白だけの場合は切らずに、その行と同じチャンクに含める。
    """
    parts: List[str] = []
    current = ""

    for line in text.splitlines(keepends=True):
        if starts_chunk(line) and current.strip():
            parts.append(current)
            current = ""
        current += line

    if current.strip():
        parts.append(current)
    elif parts:
        # 末尾の空白は最後のチャンクに吸収
        parts[-1] += current

    return _to_chunks(parts, text)


def split_whole(text: str) -> List[Chunk]:
    """全文を1チャンクとして返す"""
    return [Chunk(text=text, index=0)]


def split_into_sections(text: str) -> List[Chunk]:
    """
    トップレベル見出し（# / ##）でセクションに分割

    ### 以降の見出しは親セクションに含める。
    見出しがなければ全文を1セクションとして返す。
    """
    return _split_at_lines(text, lambda line: bool(SECTION_PATTERN.match(line)))


def split_by_headings(text: str) -> List[Chunk]:
    """
    見出し行（# で始まる行）ごとに分割

    最初の見出しより前の行は先頭チャンクになる。
    見出しがなければ全文を1チャンクとして返す。
    """
    return _split_at_lines(text, lambda line: bool(HEADING_PATTERN.match(line)))


def split_by_paragraphs(text: str) -> List[Chunk]:
    """
    2行以上連続する空行の後で分割

    - 空行1行では切らない
    - 連続した空行は直前のチャンクの末尾に含め、次の非空行から新しいチャンクを始める
    - 区切りがなければ全文を1チャンクとして返す
    """
    parts: List[str] = []
    current = ""
    blank_run = 0

    for line in text.splitlines(keepends=True):
        if not line.strip():
            blank_run += 1
            current += line
            continue

        if blank_run >= 2 and current.strip():
            parts.append(current)
            current = ""
        blank_run = 0
        current += line

    if current.strip():
        parts.append(current)
    elif parts:
        parts[-1] += current

    return _to_chunks(parts, text)


# 分割方法と関数の対応表
SEGMENTERS: dict[str, Callable[[str], List[Chunk]]] = {
    "whole": split_whole,
    "section": split_into_sections,
    "heading": split_by_headings,
    "paragraph": split_by_paragraphs,
}


def segment(text: str, strategy: Strategy) -> List[Chunk]:
    """
    指定した方法でテキストを分割する

    Args:
        text: 分割するテキスト
        strategy: 分割方法（whole/section/heading/paragraph）

    Returns:
        Chunkのリスト（1件以上、連結すると text に一致）

    Raises:
        ValueError: 未知の分割方法が指定された場合
    """
    try:
        splitter = SEGMENTERS[strategy]
    except KeyError:
        raise ValueError(f"未知の分割方法: {strategy}")
    return splitter(text)
