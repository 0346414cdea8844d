"""
LLM出力のJSON修復

LLMが返すJSONは、コードフェンス付き・途中で切れている・末尾カンマ・改行混じり・
不正なバックスラッシュなど、そのままでは json.loads できないことがある。
repair_json は次の処理をこの順番で適用する（順番に意味がある。例: フェンス除去は切れ修復より先）。

1. strip_code_fence: ```json ... ``` を剥がす（開始と終了の両方がある場合のみ）
2. repair_truncation: 途中で切れた出力を、最後に完成しているQ&Aまで切り詰めて閉じ括弧を補う
3. remove_trailing_commas: ] や } の直前のカンマを削除
4. collapse_newlines: 改行を含む空白の並びを半角スペース1つにする
5. rewrite_backslashes: \\" 以外のバックスラッシュを / に置換

どの関数も例外を投げない。修復しきれない場合はそのまま返し、呼び出し側のパース失敗→再試行に任せる。
何度適用しても結果は変わらない（repair_json(repair_json(x)) == repair_json(x)）。
"""
import re
from typing import List, Tuple

FENCE_PATTERN = re.compile(r"^```[\w+-]*[ \t]*\n?(.*?)\s*```$", re.DOTALL)
ANSWER_BOUNDARY = re.compile(r'"\s*,\s*"answer"\s*:')
# "}}" の間にカンマ・空白が挟まっていても同じ境界として扱う（後段の処理で消えるため）
DOUBLE_CLOSE_PATTERN = re.compile(r"\}[\s,]*\}")
TRAILING_COMMA_PATTERN = re.compile(r",(\s*[\]}])")
NEWLINE_RUN_PATTERN = re.compile(r"\s*\n\s*")

CLOSERS = {"{": "}", "[": "]"}


def strip_code_fence(text: str) -> str:
    """
    ```json ... ``` で囲まれていれば中身だけを返す

    開始フェンスと終了フェンスの両方がある場合のみ剥がす。
    フェンスが入れ子になっていれば、なくなるまで剥がす。
    """
    while True:
        match = FENCE_PATTERN.match(text.strip())
        if match is None:
            return text
        text = match.group(1).strip()


def _closing_for(stack: List[Tuple[str, int]]) -> str:
    """開いている括弧をすべて閉じる文字列"""
    return "".join(CLOSERS[ch] for ch, _ in reversed(stack))


def _find_entry_cut(text: str) -> Tuple[int, str] | None:
    """
    最後に完成している配列要素オブジェクトの直後の位置と、そこで必要な閉じ括弧を返す

    完成した要素がなければ、末尾で開いたままの要素オブジェクトの開始位置で切る
    （結果は空配列になる）。どちらもなければ None。
    文字列リテラル内の括弧は数えない。
    """
    stack: List[Tuple[str, int]] = []
    in_string = False
    escaped = False
    last_entry: Tuple[int, str] | None = None

    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in CLOSERS:
            stack.append((ch, i))
        elif ch in "}]":
            if not stack or CLOSERS[stack[-1][0]] != ch:
                # 括弧の対応が崩れている → ここまでの情報で判断
                break
            stack.pop()
            if ch == "}" and stack and stack[-1][0] == "[":
                last_entry = (i + 1, _closing_for(stack))

    if last_entry is not None:
        return last_entry

    # 完成した要素がない場合: 開いたままの「配列直下のオブジェクト」の手前で切る
    for depth in range(len(stack) - 1, 0, -1):
        ch, start = stack[depth]
        if ch == "{" and stack[depth - 1][0] == "[":
            return start, _closing_for(stack[:depth])
    return None


def repair_truncation(text: str) -> str:
    """
    途中で切れたJSONを閉じる

    - 末尾が } ならそのまま返す
    - '"question": ..., "answer":' の境界（空白は許容）があれば、最後に完成したQ&Aオブジェクトまで切り詰め、
      開いている配列・オブジェクトを閉じる
    - 境界がなければ、最後の "}}" で切り詰めて "}" を1つ足す
    - どちらもなければそのまま返す
    """
    if text.rstrip().endswith("}"):
        return text

    if ANSWER_BOUNDARY.search(text):
        cut = _find_entry_cut(text)
        if cut is not None:
            end, closing = cut
            return text[:end].rstrip().rstrip(",") + closing

    matches = list(DOUBLE_CLOSE_PATTERN.finditer(text))
    if matches:
        return text[:matches[-1].end()] + "}"

    return text


def remove_trailing_commas(text: str) -> str:
    """] や } の直前のカンマ（間の空白は許容）を削除"""
    while True:
        fixed = TRAILING_COMMA_PATTERN.sub(r"\1", text)
        if fixed == text:
            return fixed
        text = fixed


def collapse_newlines(text: str) -> str:
    """改行を含む空白の並びを半角スペース1つにする"""
    return NEWLINE_RUN_PATTERN.sub(" ", text)


def rewrite_backslashes(text: str) -> str:
    """
    \\" はそのまま残し、それ以外のバックスラッシュを / に置き換える

    Windowsパスなどエスケープされていないバックスラッシュでパースが失敗するのを防ぐ。
    注意: 正当なエスケープ（\\n, \\t, \\uXXXX など）も壊れる。情報が欠ける既知の制限。
    """
    result = []
    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        if ch == "\\":
            if i + 1 < length and text[i + 1] == '"':
                result.append('\\"')
                i += 2
                continue
            result.append("/")
        else:
            result.append(ch)
        i += 1
    return "".join(result)


# 適用順（変更しないこと）
REPAIR_STEPS = (
    strip_code_fence,
    repair_truncation,
    remove_trailing_commas,
    collapse_newlines,
    rewrite_backslashes,
)


def repair_json(raw_text: str) -> str:
    """LLMの生出力をパースできる形に近づける（例外は投げない）"""
    text = raw_text or ""
    for step in REPAIR_STEPS:
        text = step(text)
    return text
