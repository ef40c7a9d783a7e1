import pytest

from services.goal_service import GoalService, format_rupiah


@pytest.fixture
def service():
    return GoalService()


def test_profit_goal_from_static_table(service):
    assert service.get_goal('profit', 'Oki Irawan', '08', '2025') == 105000000


def test_cash_in_goal_uses_its_own_tables(service):
    settings = {
        'goal_profit': {'Oki Irawan': {'August 2025': 1}},
        'goal_cash_in': {'Oki Irawan': {'August 2025': 2}},
    }
    assert service.get_goal('cash_in', 'oki irawan', '8', '2025', settings) == 2
    assert service.get_goal('profit', 'oki irawan', '8', '2025', settings) == 1
    assert service.get_goal('cash_in', 'oki irawan', '8', '2025') == 420000000


def test_empty_settings_table_falls_back_to_static(service):
    settings = {'goal_profit': {}, 'goal_cash_in': {}}
    assert service.get_goal('profit', 'bogor', '9', '2025', settings) == 215000000


def test_national_static_default_for_unknown_agent(service):
    assert service.get_goal('profit', 'Unknown Agent', '10', '2025') == 1400000000


def test_unknown_goal_type_raises(service):
    with pytest.raises(ValueError):
        service.get_goal('revenue', 'Oki Irawan', '08', '2025')
    with pytest.raises(ValueError):
        service.get_goals_for_chart('revenue', 'Oki Irawan')


def test_chart_goals_ignore_static_table(service):
    assert service.get_goals_for_chart('profit', 'Oki Irawan') == {}
    settings = {'goal_profit': {'NATIONAL': {'August 2025': 10}}}
    assert service.get_goals_for_chart('profit', 'Oki Irawan', settings) == {'August 2025': 10}


def test_progress_pct():
    assert GoalService.progress_pct(50, 200) == 25.0
    assert GoalService.progress_pct(10, 0) == 0.0
    assert GoalService.progress_pct(None, 100) == 0.0


def test_goal_summary(service):
    summary = service.get_goal_summary('Oki Irawan', '08', '2025', actuals={'profit': 52500000})
    assert summary['profit']['goal'] == 105000000
    assert summary['profit']['progress_pct'] == 50.0
    assert summary['profit']['goal_display'] == 'Rp 105.000.000'
    assert summary['cash_in']['goal'] == 420000000
    assert summary['cash_in']['actual'] == 0.0


def test_format_rupiah():
    assert format_rupiah(0) == 'Rp 0'
    assert format_rupiah(1250000) == 'Rp 1.250.000'
    assert format_rupiah(-5000) == '-Rp 5.000'
    assert format_rupiah(None) == 'Rp 0'
