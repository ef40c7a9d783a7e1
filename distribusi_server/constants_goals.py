# constants_goals.py
# --- DISTRIBUSI: BẢNG MỤC TIÊU TĨNH (FALLBACK KHI CHƯA CÓ SETTINGS) ---


class GoalConstants:
    """
    Bảng mục tiêu cố định theo agent và tháng.
    Key agent viết thường, nhãn tháng dạng "august 2025" (viết thường).
    Chỉ dùng khi admin chưa cấu hình mục tiêu trong app_settings.
    """

    # 1. MỤC TIÊU LỢI NHUẬN (GOAL PROFIT)
    STATIC_GOAL_PROFIT = {
        'national': {
            'july 2025': 1250000000,
            'august 2025': 1300000000,
            'september 2025': 1350000000,
            'october 2025': 1400000000,
            'november 2025': 1450000000,
            'december 2025': 1500000000,
        },
        'oki irawan': {
            'july 2025': 100000000,
            'august 2025': 105000000,
            'september 2025': 110000000,
            'october 2025': 115000000,
            'november 2025': 120000000,
            'december 2025': 125000000,
        },
        'dedi kurniawan': {
            'july 2025': 85000000,
            'august 2025': 90000000,
            'september 2025': 92500000,
            'october 2025': 95000000,
            'november 2025': 97500000,
            'december 2025': 100000000,
        },
        'rina marlina': {
            'august 2025': 75000000,
            'september 2025': 80000000,
            'october 2025': 80000000,
            'november 2025': 85000000,
            'december 2025': 90000000,
        },
        'bogor': {
            'august 2025': 210000000,
            'september 2025': 215000000,
            'october 2025': 220000000,
            'november 2025': 225000000,
            'december 2025': 240000000,
        },
    }

    # 2. MỤC TIÊU THU TIỀN (GOAL CASH-IN)
    STATIC_GOAL_CASH_IN = {
        'national': {
            'july 2025': 5000000000,
            'august 2025': 5200000000,
            'september 2025': 5400000000,
            'october 2025': 5600000000,
            'november 2025': 5800000000,
            'december 2025': 6000000000,
        },
        'oki irawan': {
            'july 2025': 400000000,
            'august 2025': 420000000,
            'september 2025': 440000000,
            'october 2025': 460000000,
            'november 2025': 480000000,
            'december 2025': 500000000,
        },
        'dedi kurniawan': {
            'august 2025': 350000000,
            'september 2025': 360000000,
            'october 2025': 375000000,
            'november 2025': 390000000,
            'december 2025': 400000000,
        },
        'rina marlina': {
            'august 2025': 300000000,
            'september 2025': 310000000,
            'october 2025': 320000000,
            'november 2025': 330000000,
            'december 2025': 340000000,
        },
        'bogor': {
            'august 2025': 850000000,
            'september 2025': 875000000,
            'october 2025': 900000000,
            'november 2025': 925000000,
            'december 2025': 950000000,
        },
    }
