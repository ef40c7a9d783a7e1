# logger_setup.py
import logging
from logging.handlers import TimedRotatingFileHandler
import os
from flask import session


class UserFilter(logging.Filter):
    """Tự động thêm User Code vào log (để biết ai gây lỗi)."""
    def filter(self, record):
        try:
            record.user_code = session.get('user_code', 'System/Anon')
        except RuntimeError:
            # Ngoài request context (scheduler, startup)
            record.user_code = 'System'
        return True


def setup_production_logging(app):
    log_dir = app.config.get('LOG_DIR', 'logs')
    log_file = os.path.abspath(os.path.join(log_dir, app.config.get('LOG_FILE_NAME', 'distribusi.log')))

    # 1. Tạo thư mục log nếu chưa có
    os.makedirs(log_dir, exist_ok=True)

    # app.logger dùng chung theo tên app -> tránh gắn handler trùng khi tạo app nhiều lần
    for handler in app.logger.handlers:
        if getattr(handler, 'baseFilename', None) == log_file:
            return

    # 2. Định dạng: [Thời gian] [Mức độ] [File:Dòng] [User] - Nội dung
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s in %(module)s:%(lineno)d [%(user_code)s]: %(message)s'
    )

    # 3. Xoay vòng theo ngày, giữ 30 ngày
    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when='midnight',
        interval=1,
        backupCount=30,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.INFO)
    file_handler.addFilter(UserFilter())

    # 4. Gắn Handler vào Flask App và logger của bộ tra cứu mục tiêu
    app.logger.addHandler(file_handler)
    app.logger.setLevel(logging.INFO)
    logging.getLogger('goal_resolver').addHandler(file_handler)

    app.logger.info("Distribusi Startup: Hệ thống Logging đã kích hoạt.")
