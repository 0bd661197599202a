"""日付入力パネル（西暦 ⇔ 和暦の同期付き）

西暦欄を変更すると和暦欄（元号・年・月・日）を更新し、和暦欄が全て
埋まると西暦欄を更新する。和暦が実在しない日付の場合は入力欄の下に
ヒントを出すだけで、他の入力は妨げない。
"""

from __future__ import annotations

from datetime import date

import customtkinter as ctk

from utils.date_fmt import format_date, parse_date
from utils.wareki import NotFound, from_japanese_calendar, get_available_eras, to_japanese_calendar


def wareki_fields(d: date | None) -> tuple[str, str, str, str]:
    """西暦日付 → (元号, 年, 月, 日) の入力欄文字列。None なら全て空欄。"""
    if d is None:
        return ('', '', '', '')
    jp = to_japanese_calendar(d)
    return (jp.era, str(jp.year), str(jp.month), str(jp.day))


def date_from_wareki_fields(
    era: str, year: str, month: str, day: str,
) -> date | NotFound | None:
    """和暦欄の文字列 → 西暦日付。

    未入力・数値でない欄がある場合は None（まだ入力途中とみなす）。
    元号や日付が不正なら NotFound。
    """
    if not (era and year and month and day):
        return None
    try:
        y, m, d = int(year), int(month), int(day)
    except ValueError:
        return None
    return from_japanese_calendar(era, y, m, d)


class DateInputFrame(ctk.CTkFrame):
    """1 つの日付の入力セクション。"""

    def __init__(self, master, title: str) -> None:
        super().__init__(master, corner_radius=6)
        self.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            self,
            text=title,
            font=ctk.CTkFont(size=13, weight='bold'),
        ).grid(row=0, column=0, columnspan=2, sticky='w', padx=10, pady=(8, 4))

        # ── 西暦 ─────────────────────────────────────────────────────────
        ctk.CTkLabel(self, text='西暦').grid(row=1, column=0, sticky='w', padx=10)
        self._western = ctk.CTkEntry(self, placeholder_text='yyyy-mm-dd', width=140)
        self._western.grid(row=1, column=1, sticky='w', padx=(0, 10), pady=2)
        self._western.bind('<FocusOut>', lambda _e: self._sync_to_wareki())
        self._western.bind('<Return>', lambda _e: self._sync_to_wareki())

        # ── 和暦 ─────────────────────────────────────────────────────────
        ctk.CTkLabel(self, text='和暦').grid(row=2, column=0, sticky='w', padx=10)
        row = ctk.CTkFrame(self, fg_color='transparent')
        row.grid(row=2, column=1, sticky='w', padx=(0, 10), pady=2)

        self._era = ctk.CTkOptionMenu(
            row, values=[''] + [name for name, _short in get_available_eras()],
            width=80, command=lambda _v: self._sync_to_western(),
        )
        self._era.set('')
        self._era.grid(row=0, column=0, padx=(0, 4))

        self._year = self._small_entry(row, 1, '年')
        self._month = self._small_entry(row, 3, '月')
        self._day = self._small_entry(row, 5, '日')

        self._hint = ctk.CTkLabel(
            self, text='', text_color='#B45309', font=ctk.CTkFont(size=11),
        )
        self._hint.grid(row=3, column=0, columnspan=2, sticky='w', padx=10, pady=(0, 6))

    # ── 外部 API ─────────────────────────────────────────────────────────

    def get_date(self) -> date | None:
        """西暦欄の日付。空欄・不正値は None。"""
        return parse_date(self._western.get())

    def set_enabled(self, enabled: bool) -> None:
        state = 'normal' if enabled else 'disabled'
        for w in (self._western, self._era, self._year, self._month, self._day):
            w.configure(state=state)

    # ── 内部 ─────────────────────────────────────────────────────────────

    def _small_entry(self, master, column: int, unit: str) -> ctk.CTkEntry:
        entry = ctk.CTkEntry(master, width=44)
        entry.grid(row=0, column=column)
        ctk.CTkLabel(master, text=unit).grid(row=0, column=column + 1, padx=(2, 6))
        entry.bind('<FocusOut>', lambda _e: self._sync_to_western())
        entry.bind('<Return>', lambda _e: self._sync_to_western())
        return entry

    @staticmethod
    def _set_entry(entry: ctk.CTkEntry, text: str) -> None:
        entry.delete(0, 'end')
        if text:
            entry.insert(0, text)

    def _sync_to_wareki(self) -> None:
        era, year, month, day = wareki_fields(self.get_date())
        self._era.set(era)
        self._set_entry(self._year, year)
        self._set_entry(self._month, month)
        self._set_entry(self._day, day)
        self._hint.configure(text='')

    def _sync_to_western(self) -> None:
        result = date_from_wareki_fields(
            self._era.get(), self._year.get(), self._month.get(), self._day.get(),
        )
        if result is None:
            return
        if isinstance(result, NotFound):
            self._hint.configure(text=result.message)
            return
        self._set_entry(self._western, format_date(result, 'yyyy-MM-dd'))
        self._hint.configure(text='')
