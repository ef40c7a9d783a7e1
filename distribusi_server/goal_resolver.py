# goal_resolver.py
# Tra cứu mục tiêu tháng (Profit / Cash-In) theo agent.
# Thứ tự ưu tiên: Settings (admin) > Bảng tĩnh; Agent > NATIONAL.

import logging

import config

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December'
]

# =========================================================================
# HÀM HELPER XỬ LÝ NHÃN THÁNG
# =========================================================================

def parse_month(month):
    """Chuyển '8' / '08' thành 8. Trả về None nếu không nằm trong 1..12."""
    if month is None:
        return None
    month_str = str(month).strip()
    if not month_str or len(month_str) > 2 or not month_str.isdecimal():
        return None
    month_num = int(month_str)
    if month_num < 1 or month_num > 12:
        return None
    return month_num


def build_month_labels(month, year):
    """
    Trả về (nhãn viết hoa, nhãn viết thường), ví dụ ('August 2025', 'august 2025').
    Trả về None nếu tháng không hợp lệ hoặc thiếu năm.
    """
    month_num = parse_month(month)
    year_str = str(year).strip() if year is not None else ''
    if month_num is None or not year_str:
        return None
    month_name = MONTH_NAMES[month_num - 1]
    return f"{month_name} {year_str}", f"{month_name.lower()} {year_str}"


def canonical_month_label(label):
    """'august 2025' / 'AUGUST 2025' -> 'August 2025'. Nhãn sai định dạng -> None."""
    if not label:
        return None
    parts = str(label).split()
    if len(parts) != 2:
        return None
    month_part, year_part = parts
    for name in MONTH_NAMES:
        if name.lower() == month_part.lower():
            return f"{name} {year_part}"
    return None

# =========================================================================
# HÀM HELPER TRA CỨU BẢNG
# =========================================================================

def find_agent_key(table, agent_key):
    """Tìm key agent trong bảng không phân biệt hoa thường (giữ nguyên key gốc)."""
    if not table:
        return None
    wanted = str(agent_key or '').lower()
    for key in table.keys():
        if str(key).lower() == wanted:
            return key
    return None


def _pick(table, agent, label):
    """Giá trị > 0 tại table[agent][label], ngược lại None (0 = chưa đặt mục tiêu)."""
    if agent is None:
        return None
    row = table.get(agent)
    if not isinstance(row, dict):
        return None
    value = row.get(label)
    return value if value else None

# =========================================================================
# TRA CỨU CHÍNH
# =========================================================================

def resolve_goal(agent_key, month, year, settings_table, static_table):
    """
    Tra cứu mục tiêu 1 tháng cho agent.

    Settings (nếu có): agent chính xác -> agent không phân biệt hoa thường
    -> NATIONAL, mỗi bước thử nhãn viết hoa rồi viết thường.
    Bảng tĩnh: agent viết thường -> không phân biệt hoa thường -> national.
    Không bao giờ raise; không tìm thấy thì trả về 0.
    """
    labels = build_month_labels(month, year)
    if labels is None:
        logger.warning("Goal lookup: tháng/năm không hợp lệ (month=%r, year=%r)", month, year)
        return 0
    settings_label, static_label = labels
    agent_key = '' if agent_key is None else str(agent_key)

    logger.debug(
        "Goal lookup: agent=%s label=%s/%s has_settings=%s",
        agent_key, settings_label, static_label, bool(settings_table)
    )

    # 1. Settings do admin cấu hình luôn được ưu tiên
    if isinstance(settings_table, dict) and settings_table:
        matched_agent = find_agent_key(settings_table, agent_key)
        national = config.NATIONAL_KEY_SETTINGS
        stages = [
            ('settings/exact', agent_key, settings_label),
            ('settings/exact', agent_key, static_label),
            ('settings/case-insensitive', matched_agent, settings_label),
            ('settings/case-insensitive', matched_agent, static_label),
            ('settings/national', national, settings_label),
            ('settings/national', national, static_label),
        ]
        for stage, agent, label in stages:
            value = _pick(settings_table, agent, label)
            if value is not None:
                logger.debug("Goal found (%s): agent=%s label=%s value=%s", stage, agent, label, value)
                return value
    elif settings_table is not None and not isinstance(settings_table, dict):
        logger.warning("Goal lookup: settings không đúng định dạng (%s), bỏ qua", type(settings_table).__name__)

    # 2. Fallback bảng tĩnh (chỉ nhãn viết thường)
    if isinstance(static_table, dict) and static_table:
        lowered = agent_key.lower()
        stages = [
            ('static/exact', lowered),
            ('static/case-insensitive', find_agent_key(static_table, lowered)),
            ('static/national', config.NATIONAL_KEY_STATIC),
        ]
        for stage, agent in stages:
            value = _pick(static_table, agent, static_label)
            if value is not None:
                logger.debug("Goal found (%s): agent=%s label=%s value=%s", stage, agent, static_label, value)
                return value

    logger.warning("Không tìm thấy mục tiêu cho agent=%s, tháng=%s", agent_key, settings_label)
    return 0


def resolve_goals_for_chart(agent_key, settings_table):
    """
    Toàn bộ mục tiêu theo tháng của agent (dùng cho biểu đồ nhiều tháng).
    Chỉ đọc settings: không có settings -> {} (không fallback bảng tĩnh).
    """
    if not isinstance(settings_table, dict) or not settings_table:
        return {}
    agent_key = '' if agent_key is None else str(agent_key)

    row = settings_table.get(agent_key)
    if isinstance(row, dict):
        return dict(row)

    matched_agent = find_agent_key(settings_table, agent_key)
    if matched_agent is not None and isinstance(settings_table[matched_agent], dict):
        logger.debug("Chart goals (case-insensitive): %s -> %s", agent_key, matched_agent)
        return dict(settings_table[matched_agent])

    national = settings_table.get(config.NATIONAL_KEY_SETTINGS)
    return dict(national) if isinstance(national, dict) else {}
