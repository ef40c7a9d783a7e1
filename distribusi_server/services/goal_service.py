# services/goal_service.py

from goal_resolver import resolve_goal, resolve_goals_for_chart
from constants_goals import GoalConstants
from db_manager import safe_float
import config


def format_rupiah(value):
    """[CHUẨN HÓA TIỀN TỆ] 105000000 -> 'Rp 105.000.000'"""
    amount = safe_float(value)
    formatted = "{:,.0f}".format(abs(amount)).replace(',', '.')
    return f"-Rp {formatted}" if amount < 0 else f"Rp {formatted}"


class GoalService:
    def __init__(self, static_tables=None):
        self.static_tables = static_tables or {
            config.GOAL_TYPE_PROFIT: GoalConstants.STATIC_GOAL_PROFIT,
            config.GOAL_TYPE_CASH_IN: GoalConstants.STATIC_GOAL_CASH_IN,
        }

    def _setting_key(self, goal_type):
        if goal_type not in config.GOAL_SETTING_KEYS:
            raise ValueError(f"Loại mục tiêu không hợp lệ: {goal_type}")
        return config.GOAL_SETTING_KEYS[goal_type]

    def _settings_table(self, goal_type, settings):
        key = self._setting_key(goal_type)
        if not settings:
            return None
        return settings.get(key) or None

    def get_goal(self, goal_type, agent_key, month, year, settings=None):
        """Mục tiêu 1 tháng: settings của admin trước, bảng tĩnh sau."""
        settings_table = self._settings_table(goal_type, settings)
        return resolve_goal(agent_key, month, year, settings_table, self.static_tables[goal_type])

    def get_goals_for_chart(self, goal_type, agent_key, settings=None):
        """Mục tiêu theo từng tháng cho biểu đồ (chỉ lấy từ settings)."""
        settings_table = self._settings_table(goal_type, settings)
        return resolve_goals_for_chart(agent_key, settings_table)

    @staticmethod
    def progress_pct(actual, goal):
        goal_val = safe_float(goal)
        if goal_val == 0:
            return 0.0
        return round(safe_float(actual) / goal_val * 100, 2)

    def get_goal_summary(self, agent_key, month, year, settings=None, actuals=None):
        """
        Tổng hợp mục tiêu Profit + Cash-In của 1 agent trong tháng,
        kèm % hoàn thành nếu truyền số thực tế (actuals = {'profit': .., 'cash_in': ..}).
        """
        actuals = actuals or {}
        summary = {'agent': agent_key, 'month': month, 'year': year}
        for goal_type in (config.GOAL_TYPE_PROFIT, config.GOAL_TYPE_CASH_IN):
            goal = self.get_goal(goal_type, agent_key, month, year, settings)
            actual = safe_float(actuals.get(goal_type))
            summary[goal_type] = {
                'goal': goal,
                'goal_display': format_rupiah(goal),
                'actual': actual,
                'progress_pct': self.progress_pct(actual, goal),
            }
        return summary
