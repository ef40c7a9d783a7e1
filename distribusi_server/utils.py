# utils.py
from flask import session, request, current_app, jsonify
from functools import wraps


def get_user_ip():
    """Lấy IP người dùng, hỗ trợ cả trường hợp qua Proxy/Load Balancer"""
    if request.headers.getlist("X-Forwarded-For"):
        return request.headers.getlist("X-Forwarded-For")[0].split(',')[0].strip()
    else:
        return request.remote_addr


def get_user_roles():
    """Roles của user hiện tại (chuẩn hóa chữ thường, bỏ khoảng trắng)."""
    roles = session.get('user_roles', [])
    if isinstance(roles, str):
        roles = [roles]
    return [str(r).strip().lower() for r in roles if r]


# --- Decorator Login ---
def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not session.get('logged_in') or not session.get('user_code'):
            return jsonify({'success': False, 'message': 'Authentication required'}), 401
        return f(*args, **kwargs)
    return decorated_function


def roles_required(page_key):
    """Chặn truy cập nếu user không có role nào trong PAGE_ROLES[page_key]."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            result = current_app.access_service.check_page_access(
                session.get('user_code') if session.get('logged_in') else None,
                get_user_roles(),
                page_key
            )
            if not result['has_access']:
                status = 401 if result['redirect_path'] == current_app.access_service.login_path else 403
                current_app.logger.warning(f"Từ chối truy cập {request.path}: {result['message']}")
                return jsonify({
                    'success': False,
                    'message': result['message'],
                    'redirect': result['redirect_path']
                }), status
            return f(*args, **kwargs)
        return decorated_function
    return decorator
