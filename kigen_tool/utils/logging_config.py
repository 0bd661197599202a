"""
ロギング設定モジュール

ファイル（ローテーション付き）とコンソールに出力する
"""
import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

FILE_HANDLER_NAME = 'kigen_tool.file'
CONSOLE_HANDLER_NAME = 'kigen_tool.console'
HANDLER_NAMES = (FILE_HANDLER_NAME, CONSOLE_HANDLER_NAME)


def setup_logging(log_dir, level='INFO', app_name='kigen_tool'):
    """
    ルートロガーにハンドラを設定する

    Args:
        log_dir: ログファイルの保存ディレクトリ（存在しなければ作成）
        level: ログレベル名または数値（デフォルト: INFO）
        app_name: ログファイル名に使用

    Returns:
        logging.Logger: 設定済みのルートロガー
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, f'{app_name}.log')

    logger = logging.getLogger()
    logger.setLevel(level)

    # 前回このモジュールで追加したハンドラを外す（重複防止）
    for handler in list(logger.handlers):
        if handler.get_name() in HANDLER_NAMES:
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # ファイルハンドラ（ローテーション付き: 5MB x 5ファイル）
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5*1024*1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.set_name(FILE_HANDLER_NAME)
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
