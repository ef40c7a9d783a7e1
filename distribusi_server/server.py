# server.py
# --- DISTRIBUSI PRODUCTION SERVER ---

import logging
import os

# Import ứng dụng Flask (đã gắn sẵn các service nhờ factory.py)
from app import app
from waitress import serve
from apscheduler.schedulers.background import BackgroundScheduler


# =========================================================================
# 1. JOB ĐỊNH KỲ
# =========================================================================
def run_settings_refresh_job():
    """Làm mới cache settings để mục tiêu admin vừa sửa hiển thị trên mọi worker."""
    with app.app_context():
        app.settings_service.refresh()
        settings = app.settings_service.get_settings()
        logging.info(
            "[Job] Refresh settings: %d agent profit, %d agent cash-in",
            len(settings.get('goal_profit') or {}), len(settings.get('goal_cash_in') or {})
        )


# =========================================================================
# 2. CẤU HÌNH LOGGING
# =========================================================================
def logger_setup():
    logging.basicConfig(
        level=logging.INFO,
        format='[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
        handlers=[logging.StreamHandler()]
    )


# =========================================================================
# 3. MAIN ENTRY POINT
# =========================================================================
if __name__ == '__main__':
    logger_setup()

    scheduler = BackgroundScheduler()
    scheduler.add_job(run_settings_refresh_job, 'interval', minutes=5)
    scheduler.start()

    host = os.getenv('HOST', '0.0.0.0')
    port = int(os.getenv('PORT', 5000))

    print("-------------------------------------------------------")
    print("DISTRIBUSI DASHBOARD - PRODUCTION SERVER (WAITRESS)")
    print(f"Server is running at: http://{host}:{port}")
    print("-------------------------------------------------------")
    serve(app, host=host, port=port, threads=8)
