"""日付のフォーマット / 入力文字列の解釈"""

from __future__ import annotations

import re
from datetime import date, datetime

# 長いトークンから順に照合する
_TOKENS: tuple[str, ...] = ('yyyy', 'SSS', 'MM', 'dd', 'HH', 'mm', 'ss')

_DATE_RE = re.compile(r'\s*(\d{4})[-/](\d{1,2})[-/](\d{1,2})(?:[ T].*)?\s*$')


def _token_value(value: date, token: str) -> str:
    if token == 'yyyy':
        return str(value.year)
    if token == 'MM':
        return f'{value.month:02d}'
    if token == 'dd':
        return f'{value.day:02d}'
    if not isinstance(value, datetime):
        # date は時刻を持たない → 0 埋め
        return '000' if token == 'SSS' else '00'
    if token == 'HH':
        return f'{value.hour:02d}'
    if token == 'mm':
        return f'{value.minute:02d}'
    if token == 'ss':
        return f'{value.second:02d}'
    return f'{value.microsecond // 1000:03d}'


def format_date(value: date, pattern: str) -> str:
    """pattern 中のトークンを値に置き換えた文字列を返す。

    対応トークン: yyyy, MM, dd, HH, mm, ss, SSS
    パターンを左から走査して出力バッファに書き出すため、置換後の文字列が
    別のトークンとして再解釈されることはない。それ以外の文字はそのまま。

    Examples:
        >>> format_date(date(2023, 1, 5), 'yyyy/MM/dd')
        '2023/01/05'
        >>> format_date(date(2023, 6, 15), 'yyyy年MM月dd日')
        '2023年06月15日'
    """
    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        for token in _TOKENS:
            if pattern.startswith(token, i):
                out.append(_token_value(value, token))
                i += len(token)
                break
        else:
            out.append(pattern[i])
            i += 1
    return ''.join(out)


def parse_date(text: str | None) -> date | None:
    """入力欄の文字列を date に変換する。空欄・不正値は None。

    対応形式:
        - "2023-06-15" / "2023/06/15" / "2023/6/5"
        - "2023-06-15 00:00:00"（時刻部分は無視）
    """
    if not text:
        return None
    m = _DATE_RE.match(text)
    if not m:
        return None
    y, mo, d = int(m.group(1)), int(m.group(2)), int(m.group(3))
    try:
        return date(y, mo, d)
    except ValueError:
        return None
