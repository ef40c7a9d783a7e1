import pytest

import config
from services.access_service import AccessService


@pytest.fixture
def access():
    return AccessService(config.ROLES, config.PAGE_ROLES, config.ROLE_AGENT_MAP)


def test_no_user_redirects_to_login(access):
    result = access.check_roles(None, ['admin'], ['admin'])
    assert result['has_access'] is False
    assert result['redirect_path'] == '/auth/login'
    assert result['user_roles'] == []


def test_required_role_grants_access(access):
    result = access.check_roles('u1', ['analyst'], ['analyst', 'admin'], default_redirect='/analytics')
    assert result['has_access'] is True
    assert result['redirect_path'] == '/analytics'


def test_missing_role_is_denied(access):
    result = access.check_roles('u1', ['viewer'], ['admin'])
    assert result['has_access'] is False
    assert result['redirect_path'] == '/auth/access-denied'
    assert 'Required roles: admin' in result['message']
    assert 'Your roles: viewer' in result['message']


def test_empty_required_roles_only_needs_login(access):
    assert access.check_roles('u1', [], [])['has_access'] is True
    assert access.check_page_access('u1', [], 'AUTHENTICATED_ONLY')['has_access'] is True


def test_admin_and_authenticated_helpers(access):
    admin = access.check_admin_access('u1', ['admin'])
    assert admin['has_access'] and admin['redirect_path'] == '/kasbon'
    assert access.check_admin_access('u1', ['manager'])['has_access'] is False
    auth = access.check_authenticated_access('u1', ['viewer'])
    assert auth['message'] == 'Access granted - redirecting'


def test_page_roles_lookup(access):
    assert access.get_page_roles('ADMIN_PANEL') == ['admin']
    assert 'agent_oki' in access.get_page_roles('DISTRIBUSI_DASHBOARD')
    with pytest.raises(KeyError):
        access.get_page_roles('NOPE')


def test_role_catalogue(access):
    assert set(access.get_all_roles()) == {'admin', 'user', 'manager', 'analyst', 'viewer'}
    assert access.is_valid_role('analyst')
    assert access.is_valid_role('agent_oki')
    assert not access.is_valid_role('superuser')


def test_agent_scope(access):
    assert access.agent_scope(['admin', 'agent_oki']) is None
    assert access.agent_scope(['manager']) is None
    scope = access.agent_scope(['viewer', 'agent_oki'])
    assert scope == {'role': 'agent_oki', 'agent_id': 12, 'agent_name': 'Oki Irawan'}
    assert access.get_agent_name_from_role('agent_dedi') == 'Dedi Kurniawan'
    assert access.get_agent_id_from_role('agent_dedi') == 15
    assert access.get_agent_name_from_role('viewer') is None
    assert set(access.get_restricted_roles()) == set(config.ROLE_AGENT_MAP)


def test_configuration_is_copied(access):
    page_roles = {'ADMIN_PANEL': ['admin']}
    service = AccessService(config.ROLES, page_roles, {})
    page_roles['ADMIN_PANEL'].append('viewer')
    assert service.get_page_roles('ADMIN_PANEL') == ['admin']
