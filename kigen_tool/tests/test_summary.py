"""core/summary.py のテスト"""

from __future__ import annotations

from datetime import date

from core.deadline import evaluate
from core.summary import build_fusoku2_lines, build_summary


class TestBuildSummary:
    def test_fire_only(self):
        lines = build_summary(evaluate(date(2019, 6, 6), date(2023, 4, 1)))
        assert lines[:5] == [
            '選任日：2023/04/01',
            '選任日の４年前：2019/04/01',
            '防火受講日：2019/06/06',
            '防火受講日の次の4/1：2020/04/01',
            '防火受講日の次の４月１日から５年以内に受講が必要(2025/03/31)',
        ]
        assert lines[-1] == '期限は2025/03/31【令和7年3月31日】'
        assert not any('防災' in line for line in lines)

    def test_fusoku2_applied(self):
        result = evaluate(date(2019, 6, 6), date(2023, 4, 1), date(2022, 3, 1), check_disaster=True)
        lines = build_summary(result)
        # 基本期限の説明は附則2号適用前のもの
        assert '防火受講日の次の４月１日から５年以内に受講が必要(2025/03/31)' in lines
        assert '防災受講日：2022/03/01' in lines
        assert '防災受講日の次の4/1：2022/04/01' in lines
        assert '再講習の延長特例適用です' in lines
        assert lines[-1] == '期限は2027/03/31【令和9年3月31日】'

    def test_fusoku2_not_applied(self):
        result = evaluate(date(2022, 6, 6), date(2023, 4, 1), date(2019, 3, 1), check_disaster=True)
        lines = build_summary(result)
        assert '再講習の延長特例適用外です' in lines
        assert '防災管理：選任から1年以内に受講が必要(2024/03/31)' in lines
        assert lines[-1] == '期限は2024/03/31【令和6年3月31日】'

    def test_custom_pattern(self):
        lines = build_summary(evaluate(date(2019, 6, 6), date(2023, 4, 1)), 'yyyy-MM-dd')
        assert lines[0] == '選任日：2023-04-01'
        assert lines[-1] == '期限は2025-03-31【令和7年3月31日】'


class TestBuildFusoku2Lines:
    def test_empty_without_disaster(self):
        assert build_fusoku2_lines(evaluate(date(2019, 6, 6), date(2023, 4, 1))) == []
