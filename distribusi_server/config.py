# config.py
# (CẤU HÌNH TẬP TRUNG - DISTRIBUSI DASHBOARD)

import os
from dotenv import load_dotenv

# Load biến môi trường từ file .env
load_dotenv()

# =========================================================================
# 1. CẤU HÌNH HẠ TẦNG (INFRASTRUCTURE)
# =========================================================================
APP_NAME = 'AM Dashboard'
APP_VERSION = '1.0.0'

APP_SECRET_KEY = os.getenv('APP_SECRET_KEY')
if not APP_SECRET_KEY:
    raise ValueError("LỖI: APP_SECRET_KEY không được thiết lập trong biến môi trường hoặc file .env")

# Chuỗi kết nối SQLAlchemy (Postgres của Supabase hoặc SQLite khi dev)
DATABASE_URL = os.getenv('DATABASE_URL') or 'sqlite:///distribusi.db'

# Redis (Session + Cache). Tắt khi chạy local/test.
USE_REDIS = (os.getenv('USE_REDIS') or '0').strip().lower() in ('1', 'true', 'yes')
REDIS_HOST = os.getenv('REDIS_HOST') or 'localhost'
REDIS_PORT = int(os.getenv('REDIS_PORT') or 6379)

CACHE_DEFAULT_TIMEOUT = int(os.getenv('CACHE_DEFAULT_TIMEOUT') or 300)
SESSION_LIFETIME_HOURS = 6

LOG_DIR = os.getenv('LOG_DIR') or 'logs'
LOG_FILE_NAME = 'distribusi.log'

# =========================================================================
# 2. CẤU HÌNH SETTINGS (APP_SETTINGS)
# =========================================================================
TABLE_APP_SETTINGS = 'app_settings'
TABLE_AUDIT_LOGS = 'audit_logs'

SETTING_TARGET_DATE = 'target_date'
SETTING_GOAL_PROFIT = 'goal_profit'
SETTING_GOAL_CASH_IN = 'goal_cash_in'

DEFAULT_TARGET_DATE = '2025-10-03'
SETTINGS_CACHE_KEY = 'app_settings_all'

# Loại mục tiêu -> key trong app_settings
GOAL_TYPE_PROFIT = 'profit'
GOAL_TYPE_CASH_IN = 'cash_in'
GOAL_SETTING_KEYS = {
    GOAL_TYPE_PROFIT: SETTING_GOAL_PROFIT,
    GOAL_TYPE_CASH_IN: SETTING_GOAL_CASH_IN,
}

NATIONAL_KEY_SETTINGS = 'NATIONAL'
NATIONAL_KEY_STATIC = 'national'

# Các năm hiển thị trong form admin
GOAL_YEARS = ['2024', '2025', '2026']

DATE_FORMAT_DB = '%Y-%m-%d'

# =========================================================================
# 3. CẤU HÌNH PHÂN QUYỀN (ROLES & PAGES)
# =========================================================================
ROLE_ADMIN = 'admin'
ROLE_USER = 'user'
ROLE_MANAGER = 'manager'
ROLE_ANALYST = 'analyst'
ROLE_VIEWER = 'viewer'

ROLES = {
    'ADMIN': ROLE_ADMIN,
    'USER': ROLE_USER,
    'MANAGER': ROLE_MANAGER,
    'ANALYST': ROLE_ANALYST,
    'VIEWER': ROLE_VIEWER,
}

# Role giới hạn: chỉ xem dữ liệu của agent mình
ROLE_AGENT_MAP = {
    'agent_oki': {'agent_id': 12, 'agent_name': 'Oki Irawan'},
    'agent_dedi': {'agent_id': 15, 'agent_name': 'Dedi Kurniawan'},
    'agent_rina': {'agent_id': 21, 'agent_name': 'Rina Marlina'},
    'agent_bogor': {'agent_id': 30, 'agent_name': 'Bogor'},
}

# Cấu trúc: 'TRANG': [roles được phép]. List rỗng = chỉ cần đăng nhập
PAGE_ROLES = {
    'KASBON_DASHBOARD': [ROLE_ADMIN],
    'ANALYTICS_DASHBOARD': [ROLE_ANALYST, ROLE_ADMIN],
    'DISTRIBUSI_DASHBOARD': [ROLE_ADMIN, ROLE_MANAGER, ROLE_ANALYST, ROLE_VIEWER] + list(ROLE_AGENT_MAP.keys()),
    'ADMIN_PANEL': [ROLE_ADMIN],
    'USER_MANAGEMENT': [ROLE_ADMIN, ROLE_MANAGER],
    'PUBLIC_PAGES': [],
    'AUTHENTICATED_ONLY': [],
}

LOGIN_PATH = '/auth/login'
ACCESS_DENIED_PATH = '/auth/access-denied'
