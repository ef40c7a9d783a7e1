# services/settings_service.py

from flask import current_app
from db_manager import DBManager, now_str
from goal_resolver import MONTH_NAMES, canonical_month_label, find_agent_key
from constants_goals import GoalConstants
from datetime import datetime
import copy
import json
import math
import config


class SettingsService:
    """
    Đọc/ghi bảng app_settings (target_date, goal_profit, goal_cash_in).
    Kết quả đọc được cache lại; mọi thao tác ghi đều xóa cache.
    """

    def __init__(self, db_manager: DBManager, cache=None):
        self.db = db_manager
        self.cache = cache

    # --- ĐỌC ---

    def _default_settings(self):
        return {
            config.SETTING_TARGET_DATE: config.DEFAULT_TARGET_DATE,
            config.SETTING_GOAL_PROFIT: {},
            config.SETTING_GOAL_CASH_IN: {},
        }

    def _read_settings(self):
        """Đọc thẳng từ DB (không qua cache). Lỗi DB được ném lại."""
        query = f"""
            SELECT "key", value, category, is_public
            FROM {config.TABLE_APP_SETTINGS}
            ORDER BY category, "key"
        """
        rows = self.db.get_data(query, raise_errors=True)

        settings = self._default_settings()
        for row in rows:
            key = row.get('key')
            if key not in settings:
                continue
            try:
                settings[key] = json.loads(row.get('value') or 'null')
            except (TypeError, ValueError) as e:
                current_app.logger.error(f"Lỗi parse setting '{key}': {e}")
                continue
            if settings[key] is None:
                settings[key] = self._default_settings()[key]
        return settings

    def get_settings(self):
        """Trả về dict settings đầy đủ (có giá trị mặc định cho key còn thiếu)."""
        if self.cache is not None:
            cached = self.cache.get(config.SETTINGS_CACHE_KEY)
            if cached is not None:
                return cached

        try:
            settings = self._read_settings()
        except Exception as e:
            # Không cache kết quả lỗi, lần gọi sau sẽ đọc lại DB
            current_app.logger.error(f"Không đọc được app_settings, dùng giá trị mặc định: {e}")
            return self._default_settings()

        if self.cache is not None:
            self.cache.set(config.SETTINGS_CACHE_KEY, settings)
        return settings

    def get_setting(self, key):
        return self.get_settings().get(key)

    def refresh(self):
        if self.cache is not None:
            self.cache.delete(config.SETTINGS_CACHE_KEY)

    # --- GHI ---

    def update_setting(self, key, value, user_code, category='goals', description=None):
        """Cập nhật setting; nếu chưa có bản ghi thì tạo mới."""
        value_json = json.dumps(value, ensure_ascii=False, allow_nan=False)
        try:
            exists = self.db.get_data(
                f'SELECT "key" FROM {config.TABLE_APP_SETTINGS} WHERE "key" = :key',
                {'key': key},
                raise_errors=True
            )
        except Exception as e:
            current_app.logger.error(f"Không kiểm tra được setting {key}, hủy ghi: {e}")
            return False

        if exists:
            query = f"""
                UPDATE {config.TABLE_APP_SETTINGS}
                SET value = :value, updated_by = :user_code, updated_at = :now
                WHERE "key" = :key
            """
            params = {'value': value_json, 'user_code': user_code, 'now': now_str(), 'key': key}
        else:
            current_app.logger.info(f"Setting {key} chưa tồn tại, tạo bản ghi mới")
            query = f"""
                INSERT INTO {config.TABLE_APP_SETTINGS}
                    ("key", value, description, category, is_public, created_at, updated_at, created_by, updated_by)
                VALUES (:key, :value, :description, :category, :is_public, :now, :now, :user_code, :user_code)
            """
            params = {
                'key': key, 'value': value_json, 'description': description,
                'category': category, 'is_public': False, 'now': now_str(), 'user_code': user_code
            }

        success = self.db.execute_non_query(query, params)
        self.refresh()
        if success:
            current_app.logger.info(f"Setting {key} đã được cập nhật bởi {user_code}")
        return success

    def set_target_date(self, date_str, user_code):
        try:
            datetime.strptime(str(date_str), config.DATE_FORMAT_DB)
        except ValueError:
            raise ValueError(f"Ngày không hợp lệ (cần YYYY-MM-DD): {date_str}")
        return self.update_setting(config.SETTING_TARGET_DATE, date_str, user_code, category='general')

    # --- QUẢN LÝ MỤC TIÊU (ADMIN PANEL) ---

    def _goal_key(self, goal_type):
        if goal_type not in config.GOAL_SETTING_KEYS:
            raise ValueError(f"Loại mục tiêu không hợp lệ: {goal_type}")
        return config.GOAL_SETTING_KEYS[goal_type]

    def get_goal_table(self, goal_type):
        key = self._goal_key(goal_type)
        return copy.deepcopy(self.get_settings().get(key) or {})

    def _load_goal_table_for_write(self, goal_type):
        """
        Bảng mục tiêu mới nhất từ DB để sửa rồi ghi đè cả bản ghi.
        Trả về None nếu không đọc được: ghi đè từ bảng rỗng sẽ xóa mất dữ liệu của các agent khác.
        """
        key = self._goal_key(goal_type)
        try:
            settings = self._read_settings()
        except Exception as e:
            current_app.logger.error(f"Không tải được {key} để cập nhật: {e}")
            return None
        return copy.deepcopy(settings.get(key) or {})

    @staticmethod
    def _parse_amount(value):
        if isinstance(value, bool):
            raise ValueError(f"Giá trị mục tiêu không hợp lệ: {value}")
        try:
            amount = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Giá trị mục tiêu không hợp lệ: {value}")
        if math.isnan(amount) or math.isinf(amount) or amount < 0:
            raise ValueError(f"Giá trị mục tiêu không hợp lệ: {value}")
        if amount.is_integer():
            amount = int(amount)
        return amount

    def set_goal(self, goal_type, agent, month_year, value, user_code):
        """Thêm/sửa 1 mục tiêu. Nhãn tháng được chuẩn hóa về dạng 'August 2025'."""
        key = self._goal_key(goal_type)
        agent = str(agent or '').strip()
        if not agent:
            raise ValueError("Thiếu tên agent")
        label = canonical_month_label(month_year)
        if label is None:
            raise ValueError(f"Nhãn tháng không hợp lệ: {month_year}")
        amount = self._parse_amount(value)

        table = self._load_goal_table_for_write(goal_type)
        if table is None:
            return False
        agent_key = find_agent_key(table, agent) or agent
        months = table.setdefault(agent_key, {})
        # Xóa nhãn cũ khác kiểu chữ để không còn 2 bản ghi cho cùng 1 tháng
        for existing in list(months.keys()):
            if existing != label and existing.lower() == label.lower():
                del months[existing]
        months[label] = amount

        return self.update_setting(key, table, user_code)

    def delete_goal(self, goal_type, agent, month_year, user_code):
        """
        Xóa 1 tháng của agent; agent không còn tháng nào thì xóa luôn agent.
        Trả về False khi không có mục tiêu đó, None khi không tải được dữ liệu.
        """
        key = self._goal_key(goal_type)
        table = self._load_goal_table_for_write(goal_type)
        if table is None:
            return None
        agent = str(agent or '').strip()
        agent_key = agent if agent in table else find_agent_key(table, agent)
        if agent_key is None:
            return False

        months = table[agent_key]
        wanted = str(month_year or '').strip().lower()
        labels = [m for m in months.keys() if m.lower() == wanted]
        if not labels:
            return False
        for label in labels:
            del months[label]
        if not months:
            del table[agent_key]

        return self.update_setting(key, table, user_code)

    def delete_agent(self, goal_type, agent, user_code):
        key = self._goal_key(goal_type)
        table = self._load_goal_table_for_write(goal_type)
        if table is None:
            return None
        agent = str(agent or '').strip()
        agent_key = agent if agent in table else find_agent_key(table, agent)
        if agent_key is None:
            return False
        del table[agent_key]
        return self.update_setting(key, table, user_code)

    def import_static_goals(self, goal_type, user_code):
        """Chép bảng mục tiêu tĩnh vào settings (nhãn tháng viết hoa, national -> NATIONAL)."""
        key = self._goal_key(goal_type)
        static_table = {
            config.GOAL_TYPE_PROFIT: GoalConstants.STATIC_GOAL_PROFIT,
            config.GOAL_TYPE_CASH_IN: GoalConstants.STATIC_GOAL_CASH_IN,
        }[goal_type]

        imported = {}
        for agent, months in static_table.items():
            agent_key = config.NATIONAL_KEY_SETTINGS if agent == config.NATIONAL_KEY_STATIC else agent
            imported[agent_key] = {
                canonical_month_label(label) or label: amount
                for label, amount in months.items()
            }

        if not self.update_setting(key, imported, user_code):
            return None
        return imported

    @staticmethod
    def month_year_options(years=None):
        """Danh sách lựa chọn 'January 2024' ... 'December 2026' cho form admin."""
        years = years or config.GOAL_YEARS
        return [f"{month} {year}" for year in years for month in MONTH_NAMES]
