"""判定結果の説明文（プレーンテキスト）"""

from __future__ import annotations

from core.deadline import YEARS_BEFORE_SENNIN
from core.models import Evaluation
from utils.date_calc import add_years, next_fiscal_year_start
from utils.date_fmt import format_date
from utils.wareki import to_wareki_full


def build_fusoku2_lines(evaluation: Evaluation, pattern: str = 'yyyy/MM/dd') -> list[str]:
    """附則2号（再講習の延長特例）の判定部分。防災を判定しない場合は空。"""
    disaster_training = evaluation.disaster_training
    if not evaluation.check_disaster or disaster_training is None:
        return []
    lines = [
        f'防災受講日：{format_date(disaster_training, pattern)}',
        f'防災受講日の次の4/1：{format_date(next_fiscal_year_start(disaster_training), pattern)}',
    ]
    if evaluation.fusoku2_applied:
        lines.append('再講習の延長特例適用です')
        lines.append(evaluation.fire.message)
    else:
        lines.append('再講習の延長特例適用外です')
        lines.append(f'防災管理：{evaluation.disaster.message}')
    return lines


def build_summary(evaluation: Evaluation, pattern: str = 'yyyy/MM/dd') -> list[str]:
    """結果表示用の説明文を行のリストで返す。"""
    appointment = evaluation.appointment
    fire_training = evaluation.fire_training
    lines = [
        f'選任日：{format_date(appointment, pattern)}',
        f'選任日の４年前：{format_date(add_years(appointment, YEARS_BEFORE_SENNIN), pattern)}',
        f'防火受講日：{format_date(fire_training, pattern)}',
        f'防火受講日の次の4/1：{format_date(next_fiscal_year_start(fire_training), pattern)}',
        evaluation.base_fire.message,
    ]
    fusoku2 = build_fusoku2_lines(evaluation, pattern)
    if fusoku2:
        lines.append('')
        lines.extend(fusoku2)
    limit = evaluation.limit_date
    lines.append('')
    lines.append(f'期限は{format_date(limit, pattern)}【{to_wareki_full(limit)}】')
    return lines
