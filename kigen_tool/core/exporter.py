"""タイムライン項目の CSV/Excel エクスポート"""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from core.timeline import TimelineItem

# 出力列（項目名 → 見出し）
EXPORT_COLUMNS: dict[str, str] = {
    'id': 'ID',
    'group': 'グループ',
    'content': '項目',
    'start': '開始',
    'end': '終了',
    'style': 'スタイル',
}


def timeline_to_dataframe(items: Iterable[TimelineItem]) -> pd.DataFrame:
    """TimelineItem を見出し付きの DataFrame に変換する。終了日なしは空欄。"""
    rows = [
        {key: getattr(item, key) for key in EXPORT_COLUMNS}
        for item in items
    ]
    df = pd.DataFrame(rows, columns=list(EXPORT_COLUMNS))
    df['end'] = df['end'].fillna('')
    return df.rename(columns=EXPORT_COLUMNS)


def export_csv(
    df: pd.DataFrame, filepath: str, *, encoding: str = 'utf-8-sig',
) -> None:
    """timeline_to_dataframe の表を CSV に書き出す。

    既定は UTF-8 with BOM（Excel で開いても見出しの日本語が化けない）。
    """
    df.to_csv(filepath, index=False, encoding=encoding)


def export_excel(df: pd.DataFrame, filepath: str) -> None:
    """timeline_to_dataframe の表を Excel（.xlsx、1 シート）に書き出す。"""
    df.to_excel(filepath, index=False, engine='openpyxl')
