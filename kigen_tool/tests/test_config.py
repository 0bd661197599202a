"""core/config.py のテスト

テスト対象:
  - _deep_merge: ネスト辞書のマージ
  - load_config: 読み込み・既定値の補完
  - get_output_dir / get_log_dir: パス解決
"""

from __future__ import annotations

import json
import logging
import os
from unittest.mock import patch

from core.config import _deep_merge, get_log_dir, get_output_dir, load_config
from core.policy import get_policy

# ── _deep_merge ───────────────────────────────────────────────────────────────


class TestDeepMerge:
    def test_flat_merge(self):
        base = {'a': 1, 'b': 2}
        override = {'b': 3, 'c': 4}
        assert _deep_merge(base, override) == {'a': 1, 'b': 3, 'c': 4}

    def test_nested_merge(self):
        base = {'a': {'x': 1, 'y': 2}}
        override = {'a': {'y': 3, 'z': 4}}
        assert _deep_merge(base, override) == {'a': {'x': 1, 'y': 3, 'z': 4}}

    def test_override_replaces_non_dict(self):
        assert _deep_merge({'a': 'string'}, {'a': {'nested': True}}) == {'a': {'nested': True}}

    def test_empty_override(self):
        base = {'a': 1, 'b': {'c': 2}}
        assert _deep_merge(base, {}) == base

    def test_base_not_modified(self):
        base = {'a': {'x': 1}}
        _deep_merge(base, {'a': {'x': 2}})
        assert base == {'a': {'x': 1}}


# ── load_config ───────────────────────────────────────────────────────────────


class TestLoadConfig:
    @patch('core.config._get_bundle_dir')
    @patch('core.config._get_config_path')
    def test_nonexistent_returns_defaults(self, mock_path, mock_bundle, tmp_path):
        mock_path.return_value = str(tmp_path / 'nonexistent.json')
        mock_bundle.return_value = str(tmp_path / 'no_bundle')
        config = load_config()
        assert config['policy'] == 'strict'
        assert config['display_date_format'] == 'yyyy/MM/dd'
        assert config['window']['appearance_mode'] == 'light'
        # 既定のポリシー名は解決できる
        assert get_policy(config['policy']).name == 'strict'

    @patch('core.config._get_bundle_dir')
    @patch('core.config._get_config_path')
    def test_malformed_json_returns_defaults(self, mock_path, mock_bundle, tmp_path, caplog):
        config_path = tmp_path / 'config.json'
        config_path.write_text('{invalid json!!!', encoding='utf-8')
        mock_path.return_value = str(config_path)
        mock_bundle.return_value = str(tmp_path / 'no_bundle')

        with caplog.at_level(logging.WARNING):
            config = load_config()
        assert config['policy'] == 'strict'
        assert 'config.json を読み込めません' in caplog.text

    @patch('core.config._get_bundle_dir')
    @patch('core.config._get_config_path')
    def test_partial_config_is_merged(self, mock_path, mock_bundle, tmp_path):
        config_path = tmp_path / 'config.json'
        config_path.write_text(
            json.dumps({'policy': 'legacy', 'window': {'color_theme': 'green'}}),
            encoding='utf-8',
        )
        mock_path.return_value = str(config_path)
        mock_bundle.return_value = str(tmp_path / 'no_bundle')

        config = load_config()
        assert config['policy'] == 'legacy'
        assert config['window'] == {'appearance_mode': 'light', 'color_theme': 'green'}
        assert config['log_level'] == 'INFO'

    @patch('core.config._get_bundle_dir')
    @patch('core.config._get_config_path')
    def test_bundle_config_used_as_fallback(self, mock_path, mock_bundle, tmp_path):
        bundle = tmp_path / 'bundle'
        bundle.mkdir()
        (bundle / 'config.json').write_text(json.dumps({'log_level': 'DEBUG'}), encoding='utf-8')
        mock_path.return_value = str(tmp_path / 'app' / 'config.json')
        mock_bundle.return_value = str(bundle)

        assert load_config()['log_level'] == 'DEBUG'


# ── get_output_dir / get_log_dir ──────────────────────────────────────────────


class TestGetOutputDir:
    @patch('core.config._get_config_path')
    def test_relative_is_created(self, mock_path, tmp_path):
        mock_path.return_value = str(tmp_path / 'config.json')
        path = get_output_dir({'output_dir': './出力'})
        assert os.path.isdir(path)
        assert path == os.path.normpath(str(tmp_path / '出力'))

    def test_absolute(self, tmp_path):
        target = tmp_path / 'exports'
        assert get_output_dir({'output_dir': str(target)}) == str(target)
        assert target.is_dir()


class TestGetLogDir:
    @patch('core.config._get_config_path')
    def test_default_is_logs_beside_config(self, mock_path, tmp_path):
        mock_path.return_value = str(tmp_path / 'config.json')
        assert get_log_dir({'log_dir': ''}) == os.path.normpath(str(tmp_path / 'logs'))

    def test_absolute(self, tmp_path):
        assert get_log_dir({'log_dir': str(tmp_path)}) == str(tmp_path)
