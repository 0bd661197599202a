"""防火・防災管理 再講習期限計算ツール：エントリーポイント"""

import logging
import os
import sys

# PyInstaller frozen 対応
if getattr(sys, 'frozen', False):
    os.chdir(os.path.dirname(sys.executable))


def main():
    try:
        from core.config import get_log_dir, load_config
        from utils.logging_config import setup_logging

        config = load_config()
        setup_logging(get_log_dir(config), level=config.get('log_level', 'INFO'))

        from gui.app import App
        app = App()
        app.mainloop()
    except Exception:
        logging.exception('アプリの起動に失敗しました')
        try:
            import tkinter.messagebox as _mb
            _mb.showerror('起動エラー', 'アプリの起動に失敗しました。\nログを確認してください。')
        except Exception:
            logging.debug('エラーダイアログを表示できませんでした', exc_info=True)


if __name__ == '__main__':
    main()
