# blueprints/settings_bp.py

from flask import Blueprint, request, jsonify, session, current_app
from utils import login_required, roles_required

settings_bp = Blueprint('settings_bp', __name__)


def _payload():
    """Body JSON dạng object hoặc form; các kiểu JSON khác (list, số, chuỗi) coi như rỗng."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


@settings_bp.route('/api/settings', methods=['GET'])
@login_required
@roles_required('ADMIN_PANEL')
def api_get_settings():
    """API: Toàn bộ settings + danh sách tháng cho form admin."""
    settings_service = current_app.settings_service
    return jsonify({
        'success': True,
        'data': settings_service.get_settings(),
        'month_year_options': settings_service.month_year_options(),
    })


@settings_bp.route('/api/settings/refresh', methods=['POST'])
@login_required
@roles_required('ADMIN_PANEL')
def api_refresh_settings():
    current_app.settings_service.refresh()
    return jsonify({'success': True, 'data': current_app.settings_service.get_settings()})


@settings_bp.route('/api/settings/target_date', methods=['POST'])
@login_required
@roles_required('ADMIN_PANEL')
def api_set_target_date():
    data = _payload()
    try:
        success = current_app.settings_service.set_target_date(data.get('target_date'), session.get('user_code'))
    except ValueError as e:
        return jsonify({'success': False, 'message': str(e)}), 400
    if not success:
        return jsonify({'success': False, 'message': 'Lỗi hệ thống khi lưu ngày mục tiêu.'}), 500
    return jsonify({'success': True, 'target_date': data.get('target_date')})


@settings_bp.route('/api/settings/goals/<string:goal_type>', methods=['POST'])
@login_required
@roles_required('ADMIN_PANEL')
def api_set_goal(goal_type):
    """API: Thêm/sửa mục tiêu (agent, month_year, value)."""
    data = _payload()
    settings_service = current_app.settings_service
    try:
        success = settings_service.set_goal(
            goal_type, data.get('agent'), data.get('month_year'), data.get('value'), session.get('user_code')
        )
    except ValueError as e:
        return jsonify({'success': False, 'message': str(e)}), 400
    if not success:
        return jsonify({'success': False, 'message': 'Lỗi hệ thống khi lưu mục tiêu.'}), 500
    return jsonify({'success': True, 'data': settings_service.get_goal_table(goal_type)})


@settings_bp.route('/api/settings/goals/<string:goal_type>', methods=['DELETE'])
@login_required
@roles_required('ADMIN_PANEL')
def api_delete_goal(goal_type):
    data = _payload()
    if not data.get('agent') or not data.get('month_year'):
        data = request.args.to_dict()
    settings_service = current_app.settings_service
    try:
        deleted = settings_service.delete_goal(
            goal_type, data.get('agent'), data.get('month_year'), session.get('user_code')
        )
    except ValueError as e:
        return jsonify({'success': False, 'message': str(e)}), 400
    if deleted is None:
        return jsonify({'success': False, 'message': 'Lỗi hệ thống khi tải mục tiêu.'}), 500
    if not deleted:
        return jsonify({'success': False, 'message': 'Không tìm thấy mục tiêu cần xóa.'}), 404
    return jsonify({'success': True, 'data': settings_service.get_goal_table(goal_type)})


@settings_bp.route('/api/settings/goals/<string:goal_type>/agent/<path:agent>', methods=['DELETE'])
@login_required
@roles_required('ADMIN_PANEL')
def api_delete_agent(goal_type, agent):
    settings_service = current_app.settings_service
    try:
        deleted = settings_service.delete_agent(goal_type, agent, session.get('user_code'))
    except ValueError as e:
        return jsonify({'success': False, 'message': str(e)}), 400
    if deleted is None:
        return jsonify({'success': False, 'message': 'Lỗi hệ thống khi tải mục tiêu.'}), 500
    if not deleted:
        return jsonify({'success': False, 'message': f'Không tìm thấy agent {agent}.'}), 404
    return jsonify({'success': True, 'data': settings_service.get_goal_table(goal_type)})


@settings_bp.route('/api/settings/goals/<string:goal_type>/import_static', methods=['POST'])
@login_required
@roles_required('ADMIN_PANEL')
def api_import_static(goal_type):
    try:
        imported = current_app.settings_service.import_static_goals(goal_type, session.get('user_code'))
    except ValueError as e:
        return jsonify({'success': False, 'message': str(e)}), 400
    if imported is None:
        return jsonify({'success': False, 'message': 'Lỗi hệ thống khi import dữ liệu tĩnh.'}), 500
    return jsonify({'success': True, 'data': imported})
