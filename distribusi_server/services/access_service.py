# services/access_service.py

import config


class AccessService:
    """
    Kiểm tra quyền theo role và giới hạn dữ liệu theo agent.
    Cấu hình role/trang/agent được truyền vào lúc khởi tạo (xem factory.py).
    """

    def __init__(self, roles, page_roles, role_agent_map,
                 login_path=config.LOGIN_PATH, access_denied_path=config.ACCESS_DENIED_PATH):
        self.roles = dict(roles)
        self.page_roles = {k: list(v) for k, v in page_roles.items()}
        self.role_agent_map = dict(role_agent_map)
        self.login_path = login_path
        self.access_denied_path = access_denied_path

    # --- Tra cứu cấu hình ---

    def get_page_roles(self, page_key):
        if page_key not in self.page_roles:
            raise KeyError(f"Trang không tồn tại trong PAGE_ROLES: {page_key}")
        return list(self.page_roles[page_key])

    def get_all_roles(self):
        return list(self.roles.values())

    def is_valid_role(self, role):
        return role in self.roles.values() or role in self.role_agent_map

    def get_restricted_roles(self):
        return list(self.role_agent_map.keys())

    def get_agent_name_from_role(self, role):
        agent = self.role_agent_map.get(role)
        return agent['agent_name'] if agent else None

    def get_agent_id_from_role(self, role):
        agent = self.role_agent_map.get(role)
        return agent['agent_id'] if agent else None

    # --- Kiểm tra quyền ---

    def check_roles(self, user_code, user_roles, required_roles, default_redirect='/', access_denied_path=None):
        """
        Kiểm tra user có ít nhất 1 role trong required_roles.
        required_roles rỗng = chỉ cần đăng nhập.
        """
        access_denied_path = access_denied_path or self.access_denied_path
        if not user_code:
            return {
                'has_access': False,
                'redirect_path': self.login_path,
                'user_roles': [],
                'message': 'Authentication required'
            }

        user_roles = list(user_roles or [])
        required_roles = list(required_roles or [])
        if not required_roles or any(role in user_roles for role in required_roles):
            return {
                'has_access': True,
                'redirect_path': default_redirect,
                'user_roles': user_roles,
                'message': 'Access granted'
            }

        return {
            'has_access': False,
            'redirect_path': access_denied_path,
            'user_roles': user_roles,
            'message': (f"Access denied. Required roles: {', '.join(required_roles)}. "
                        f"Your roles: {', '.join(user_roles) or 'None'}")
        }

    def check_page_access(self, user_code, user_roles, page_key, default_redirect='/'):
        return self.check_roles(user_code, user_roles, self.get_page_roles(page_key), default_redirect)

    def check_admin_access(self, user_code, user_roles, default_redirect='/kasbon', access_denied_path=None):
        return self.check_roles(user_code, user_roles, [config.ROLE_ADMIN], default_redirect, access_denied_path)

    def check_authenticated_access(self, user_code, user_roles, default_redirect='/'):
        result = self.check_roles(user_code, user_roles, [], default_redirect)
        if result['has_access']:
            result['message'] = 'Access granted - redirecting'
        return result

    # --- Giới hạn dữ liệu theo agent ---

    def agent_scope(self, user_roles):
        """
        Admin hoặc user không có role giới hạn -> None (xem tất cả agent).
        User có role giới hạn -> {'role', 'agent_id', 'agent_name'} của role đó.
        """
        user_roles = list(user_roles or [])
        if config.ROLE_ADMIN in user_roles:
            return None
        for role in user_roles:
            if role in self.role_agent_map:
                agent = self.role_agent_map[role]
                return {'role': role, 'agent_id': agent['agent_id'], 'agent_name': agent['agent_name']}
        return None
