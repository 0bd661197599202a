"""防火・防災管理 再講習期限計算ツール：メインウィンドウ"""

from __future__ import annotations

import logging
import tkinter.filedialog as fd
import tkinter.messagebox as mb

import customtkinter as ctk

from core.config import get_output_dir, load_config
from core.deadline import evaluate
from core.exporter import export_csv, export_excel, timeline_to_dataframe
from core.models import Evaluation, MissingInput
from core.policy import get_policy
from core.summary import build_summary
from core.timeline import TimelineItem, build_timeline
from gui.frames.date_input_frame import DateInputFrame
from gui.timeline_renderer import render_timeline
from utils.date_fmt import format_date

logger = logging.getLogger(__name__)

_TIMELINE_WIDTH = 900


def _result_text(result: Evaluation | MissingInput, pattern: str) -> str:
    """結果欄に表示する文字列。MissingInput はエラー表示。"""
    if isinstance(result, MissingInput):
        return f'エラー\n{result.message}'
    return '\n'.join(build_summary(result, pattern))


def _default_export_name(result: Evaluation) -> str:
    """エクスポートファイルの既定名（拡張子なし）。"""
    return f'受講期限_{format_date(result.limit_date, "yyyyMMdd")}'


def _write_export(items: list[TimelineItem], path: str) -> None:
    """拡張子で CSV / Excel を切り替えて書き出す。"""
    df = timeline_to_dataframe(items)
    if path.lower().endswith('.csv'):
        export_csv(df, path)
    else:
        export_excel(df, path)


class App(ctk.CTk):
    """メインウィンドウ。入力・判定・表示の調整役。"""

    def __init__(self) -> None:
        super().__init__()
        self.config = load_config()
        self.policy = get_policy(self.config.get('policy', 'strict'))
        self._pattern = self.config.get('display_date_format', 'yyyy/MM/dd')

        self.title(f'防火・防災管理 再講習期限計算 v{self.config.get("app_version", "1.0.0")}')
        self.geometry('1180x720')
        self.minsize(960, 600)
        window = self.config.get('window', {})
        ctk.set_appearance_mode(window.get('appearance_mode', 'light'))
        ctk.set_default_color_theme(window.get('color_theme', 'blue'))

        self._result: Evaluation | None = None
        self._items: list[TimelineItem] = []
        self._timeline_image: ctk.CTkImage | None = None

        self._build_layout()

    # ────────────────────────────────────────────────────────────────────────
    # レイアウト構築
    # ────────────────────────────────────────────────────────────────────────

    def _build_layout(self) -> None:
        self.grid_columnconfigure(1, weight=1)
        self.grid_rowconfigure(0, weight=1)

        # ── 左パネル（入力） ────────────────────────────────────────────
        left = ctk.CTkScrollableFrame(self, width=320, corner_radius=0)
        left.grid(row=0, column=0, sticky='nsew', padx=(5, 2), pady=5)
        left.grid_columnconfigure(0, weight=1)

        self.appointment_input = DateInputFrame(left, '① 選任日')
        self.appointment_input.grid(row=0, column=0, sticky='ew', padx=5, pady=(5, 3))

        self.fire_input = DateInputFrame(left, '② 防火管理講習 受講日')
        self.fire_input.grid(row=1, column=0, sticky='ew', padx=5, pady=3)

        self._check_disaster = ctk.BooleanVar(value=False)
        ctk.CTkCheckBox(
            left, text='防災管理講習も判定する',
            variable=self._check_disaster, command=self._on_check_disaster,
        ).grid(row=2, column=0, sticky='w', padx=10, pady=(8, 3))

        self.disaster_input = DateInputFrame(left, '③ 防災管理講習 受講日')
        self.disaster_input.grid(row=3, column=0, sticky='ew', padx=5, pady=3)
        self.disaster_input.set_enabled(False)

        ctk.CTkButton(
            left, text='期限を計算',
            font=ctk.CTkFont(size=14, weight='bold'), height=40,
            command=self._on_calculate,
        ).grid(row=4, column=0, sticky='ew', padx=10, pady=(10, 4))

        self._export_btn = ctk.CTkButton(
            left, text='📄 タイムラインを書き出す', state='disabled',
            command=self._on_export,
        )
        self._export_btn.grid(row=5, column=0, sticky='ew', padx=10, pady=(4, 10))

        ctk.CTkLabel(
            left, text=f'計算ポリシー: {self.policy.name}',
            text_color='gray', font=ctk.CTkFont(size=10),
        ).grid(row=6, column=0, sticky='w', padx=10, pady=(0, 8))

        # ── 右パネル（結果） ────────────────────────────────────────────
        right = ctk.CTkFrame(self, corner_radius=0)
        right.grid(row=0, column=1, sticky='nsew', padx=(2, 5), pady=5)
        right.grid_columnconfigure(0, weight=1)
        right.grid_rowconfigure(0, weight=1)

        self._result_box = ctk.CTkTextbox(right, font=ctk.CTkFont(size=13), wrap='word')
        self._result_box.grid(row=0, column=0, sticky='nsew', padx=5, pady=5)
        self._result_box.configure(state='disabled')

        self._timeline_label = ctk.CTkLabel(right, text='')
        self._timeline_label.grid(row=1, column=0, sticky='ew', padx=5, pady=(0, 5))

    # ────────────────────────────────────────────────────────────────────────
    # コールバック
    # ────────────────────────────────────────────────────────────────────────

    def _on_check_disaster(self) -> None:
        self.disaster_input.set_enabled(self._check_disaster.get())

    def _on_calculate(self) -> None:
        result = evaluate(
            self.fire_input.get_date(),
            self.appointment_input.get_date(),
            self.disaster_input.get_date(),
            check_disaster=self._check_disaster.get(),
            policy=self.policy,
        )
        self._show_text(_result_text(result, self._pattern))

        if isinstance(result, MissingInput):
            logger.warning('入力エラー: %s (%s)', result.message, ', '.join(result.fields))
            self._result = None
            self._items = []
            self._hide_timeline()
            self._export_btn.configure(state='disabled')
            return

        self._result = result
        self._items = build_timeline(result)
        self._show_timeline(render_timeline(self._items, width=_TIMELINE_WIDTH))
        self._export_btn.configure(state='normal')

    def _on_export(self) -> None:
        if self._result is None:
            return
        path = fd.asksaveasfilename(
            title='タイムラインの書き出し',
            initialdir=get_output_dir(self.config),
            initialfile=_default_export_name(self._result),
            defaultextension='.xlsx',
            filetypes=[('Excel ファイル', '*.xlsx'), ('CSV ファイル', '*.csv')],
        )
        if not path:
            return
        try:
            _write_export(self._items, path)
        except OSError as e:
            logger.exception('書き出しに失敗しました: %s', path)
            mb.showerror('書き出しエラー', f'ファイルを書き出せませんでした。\n{e}')
            return
        logger.info('タイムラインを書き出しました: %s', path)

    # ────────────────────────────────────────────────────────────────────────
    # ヘルパー
    # ────────────────────────────────────────────────────────────────────────

    def _show_text(self, text: str) -> None:
        self._result_box.configure(state='normal')
        self._result_box.delete('1.0', 'end')
        self._result_box.insert('1.0', text)
        self._result_box.configure(state='disabled')

    def _show_timeline(self, img) -> None:
        self._timeline_image = ctk.CTkImage(light_image=img, size=img.size)
        self._timeline_label.configure(image=self._timeline_image)
        self._timeline_label.grid()

    def _hide_timeline(self) -> None:
        # CTkLabel は image=None では表示中の画像を消さないため、ラベルごと隠す。
        # 前回の CTkImage は次の表示で置き換えるまで保持する。
        self._timeline_label.grid_remove()
