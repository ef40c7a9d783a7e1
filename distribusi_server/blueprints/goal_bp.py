# blueprints/goal_bp.py

from flask import Blueprint, request, jsonify, current_app
from utils import login_required, roles_required, get_user_roles
from services.goal_service import format_rupiah
from datetime import datetime
import config

goal_bp = Blueprint('goal_bp', __name__)


def _resolve_agent(requested_agent):
    """User bị giới hạn luôn bị ép về agent của mình; admin/manager chọn tùy ý (mặc định NATIONAL)."""
    scope = current_app.access_service.agent_scope(get_user_roles())
    if scope:
        return scope['agent_name']
    return (requested_agent or '').strip() or config.NATIONAL_KEY_SETTINGS


def _month_year_args():
    now = datetime.now()
    month = request.args.get('month', str(now.month)).strip()
    year = request.args.get('year', str(now.year)).strip()
    return month, year


@goal_bp.route('/api/goals/summary', methods=['GET'])
@login_required
@roles_required('DISTRIBUSI_DASHBOARD')
def api_goal_summary():
    """API: Mục tiêu Profit + Cash-In của agent trong tháng, kèm % hoàn thành."""
    agent = _resolve_agent(request.args.get('agent'))
    month, year = _month_year_args()
    actuals = {
        config.GOAL_TYPE_PROFIT: request.args.get('profit_actual'),
        config.GOAL_TYPE_CASH_IN: request.args.get('cash_in_actual'),
    }
    settings = current_app.settings_service.get_settings()
    summary = current_app.goal_service.get_goal_summary(agent, month, year, settings, actuals)
    return jsonify({'success': True, 'data': summary})


@goal_bp.route('/api/goals/<string:goal_type>', methods=['GET'])
@login_required
@roles_required('DISTRIBUSI_DASHBOARD')
def api_get_goal(goal_type):
    """API: Mục tiêu 1 tháng (profit | cash_in)."""
    agent = _resolve_agent(request.args.get('agent'))
    month, year = _month_year_args()
    settings = current_app.settings_service.get_settings()
    try:
        goal = current_app.goal_service.get_goal(goal_type, agent, month, year, settings)
    except ValueError as e:
        return jsonify({'success': False, 'message': str(e)}), 400

    return jsonify({
        'success': True,
        'data': {
            'goal_type': goal_type,
            'agent': agent,
            'month': month,
            'year': year,
            'goal': goal,
            'goal_display': format_rupiah(goal),
        }
    })


@goal_bp.route('/api/goals/<string:goal_type>/chart', methods=['GET'])
@login_required
@roles_required('DISTRIBUSI_DASHBOARD')
def api_goal_chart(goal_type):
    """API: Mục tiêu theo tháng cho biểu đồ (không fallback bảng tĩnh)."""
    agent = _resolve_agent(request.args.get('agent'))
    settings = current_app.settings_service.get_settings()
    try:
        goals = current_app.goal_service.get_goals_for_chart(goal_type, agent, settings)
    except ValueError as e:
        return jsonify({'success': False, 'message': str(e)}), 400
    return jsonify({'success': True, 'data': {'goal_type': goal_type, 'agent': agent, 'goals': goals}})
