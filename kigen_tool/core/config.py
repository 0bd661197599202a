"""設定ファイル（config.json）の読み込み

このツールは状態を保存しないため、設定は読み込み専用。
元号テーブルは設定対象外（utils/wareki.py に固定）。
"""

import json
import logging
import os
import sys
from typing import Any

logger = logging.getLogger(__name__)


def _get_app_dir() -> str:
    """アプリの実行ディレクトリを返す。"""
    if getattr(sys, 'frozen', False):
        return os.path.dirname(sys.executable)
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _get_bundle_dir() -> str:
    """PyInstaller バンドルデータのディレクトリを返す（読み取り専用リソース用）。

    frozen 時は sys._MEIPASS（_internal/）、開発時はプロジェクトルート。
    """
    if getattr(sys, 'frozen', False):
        return getattr(sys, '_MEIPASS', os.path.dirname(sys.executable))
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _get_config_path() -> str:
    """config.json の絶対パスを返す。exe / 開発どちらでも動作する。"""
    return os.path.join(_get_app_dir(), 'config.json')


def _default_config() -> dict[str, Any]:
    return {
        'app_version': '1.0.0',
        'policy': 'strict',                 # 'strict' | 'legacy'（core/policy.py）
        'display_date_format': 'yyyy/MM/dd',
        'output_dir': './出力',
        'log_level': 'INFO',
        'log_dir': '',                      # 空欄ならアプリディレクトリの logs/
        'window': {
            'appearance_mode': 'light',
            'color_theme': 'blue',
        },
    }


def _deep_merge(base: dict, override: dict) -> dict:
    """ネストした辞書を再帰的にマージする。override が優先。"""
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def load_config() -> dict[str, Any]:
    """config.json を読み込む。存在しない / 不正な場合はデフォルト値を返す。

    読み込み優先順位:
      1. exe ディレクトリの config.json（ユーザー編集版）
      2. バンドルディレクトリの config.json（初期同梱版）
      3. デフォルト値
    """
    defaults = _default_config()

    candidates = [_get_config_path()]
    bundle_path = os.path.join(_get_bundle_dir(), 'config.json')
    if bundle_path != candidates[0]:
        candidates.append(bundle_path)

    for path in candidates:
        if not os.path.exists(path):
            continue
        try:
            with open(path, encoding='utf-8') as f:
                data = json.load(f)
            return _deep_merge(defaults, data)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning('config.json を読み込めません (%s): %s', path, exc)
            continue

    return _deep_merge(defaults, {})


def get_output_dir(config: dict[str, Any]) -> str:
    """出力フォルダの絶対パスを返す。存在しない場合は作成する。"""
    raw = config.get('output_dir', './出力')
    if os.path.isabs(raw):
        path = raw
    else:
        base = os.path.dirname(_get_config_path())
        path = os.path.normpath(os.path.join(base, raw))
    os.makedirs(path, exist_ok=True)
    return path


def get_log_dir(config: dict[str, Any]) -> str:
    """ログフォルダの絶対パスを返す（作成は setup_logging が行う）。"""
    raw = config.get('log_dir', '')
    if raw and os.path.isabs(raw):
        return raw
    base = os.path.dirname(_get_config_path())
    return os.path.normpath(os.path.join(base, raw or 'logs'))
