# db_manager.py

from flask import current_app
import pandas as pd
from sqlalchemy import create_engine, text, MetaData, Table, Column, String, Text, Boolean, Integer
from datetime import datetime
import config
import math
import logging

# =========================================================================
# HÀM HELPER XỬ LÝ DỮ LIỆU
# =========================================================================

def safe_float(value):
    """Xử lý an toàn giá trị None, chuỗi rỗng, 'None' hoặc 'nan' thành 0.0 float."""
    if value is None:
        return 0.0

    # Chuyển về chuỗi và xử lý chữ thường để bắt 'nan', 'none', ''
    str_val = str(value).strip().lower()

    if str_val in ['', 'none', 'nan']:
        return 0.0

    try:
        f_val = float(value)
        # Kiểm tra thêm nếu giá trị là vô cực hoặc NaN của Python math
        if math.isnan(f_val) or math.isinf(f_val):
            return 0.0
        return f_val
    except (ValueError, TypeError):
        return 0.0


def now_str():
    return datetime.now().strftime('%Y-%m-%d %H:%M:%S')

# =========================================================================
# SCHEMA
# =========================================================================

metadata = MetaData()

app_settings_table = Table(
    config.TABLE_APP_SETTINGS, metadata,
    Column('key', String(100), primary_key=True),
    Column('value', Text),
    Column('description', Text),
    Column('category', String(50), default='general'),
    Column('is_public', Boolean, default=False),
    Column('created_at', String(30)),
    Column('updated_at', String(30)),
    Column('created_by', String(100)),
    Column('updated_by', String(100)),
)

audit_logs_table = Table(
    config.TABLE_AUDIT_LOGS, metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('user_code', String(100)),
    Column('action_type', String(100)),
    Column('severity', String(20)),
    Column('details', Text),
    Column('ip_address', String(64)),
    Column('created_at', String(30)),
)

# =========================================================================
# DATA ACCESS LAYER (DAL)
# =========================================================================

class DBManager:
    def __init__(self, database_url=None):
        self.database_url = database_url or config.DATABASE_URL
        logging.info(f"--- Init DB Connection Pool to {self.database_url.split('@')[-1]} ---")

        if self.database_url.startswith('sqlite'):
            self.engine = create_engine(self.database_url)
        else:
            self.engine = create_engine(
                self.database_url,
                pool_size=10,
                max_overflow=20,
                pool_timeout=30,
                pool_recycle=1800,
                pool_pre_ping=True
            )

    def ensure_schema(self):
        """Tạo bảng app_settings / audit_logs nếu chưa có."""
        metadata.create_all(self.engine)

    # 1. PHƯƠNG THỨC ĐỌC (Dashboard/Report)
    def get_data(self, query, params=None, raise_errors=False):
        """
        Thực thi SELECT dùng SQLAlchemy Pool + Pandas.
        Tham số dạng :ten_tham_so, truyền vào bằng dict.
        raise_errors=True: ném lại lỗi thay vì trả về [] (dùng cho luồng ghi,
        nơi "không có dữ liệu" và "không đọc được" phải phân biệt).
        """
        try:
            with self.engine.connect() as conn:
                df = pd.read_sql(text(query), conn, params=params or {})

                # Làm sạch dữ liệu chuỗi
                for col in df.select_dtypes(include=['object']).columns:
                    def clean_cell(x):
                        if x is None: return ''
                        if isinstance(x, bytes):
                            return x.decode('utf-8', errors='ignore')
                        return str(x).strip()

                    df[col] = df[col].apply(clean_cell)

                return df.to_dict('records')

        except Exception as e:
            current_app.logger.error(f"Lỗi get_data: {e}")
            if raise_errors:
                raise
            return []

    # 2. PHƯƠNG THỨC GHI
    def execute_non_query(self, query, params=None):
        """Thực thi INSERT/UPDATE/DELETE trong 1 transaction."""
        try:
            with self.engine.begin() as conn:
                conn.execute(text(query), params or {})
            return True
        except Exception as e:
            current_app.logger.error(f"Lỗi execute_non_query: {e}")
            return False

    # --- CÁC HÀM CỤ THỂ KHÁC ---

    def write_audit_log(self, user_code, action_type, severity, details, ip_address):
        """Ghi log hệ thống. Lỗi ghi log không làm crash request."""
        query = f"""
            INSERT INTO {config.TABLE_AUDIT_LOGS} (user_code, action_type, severity, details, ip_address, created_at)
            VALUES (:user_code, :action_type, :severity, :details, :ip_address, :created_at)
        """
        try:
            with self.engine.begin() as conn:
                conn.execute(text(query), {
                    'user_code': user_code,
                    'action_type': action_type,
                    'severity': severity,
                    'details': details,
                    'ip_address': ip_address,
                    'created_at': now_str(),
                })
        except Exception as e:
            current_app.logger.error(f"Lỗi write_audit_log: {e}")
