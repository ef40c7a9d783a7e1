# factory.py
from flask import Flask, session, request, jsonify
from datetime import timedelta
import json
import redis
import config
from flask_session import Session
from flask_caching import Cache
from logger_setup import setup_production_logging
from utils import get_user_ip

# 1. Import DB Manager & Services
from db_manager import DBManager
from services.goal_service import GoalService
from services.settings_service import SettingsService
from services.access_service import AccessService

# 2. Import Blueprints
from blueprints.goal_bp import goal_bp
from blueprints.settings_bp import settings_bp


def create_app(test_config=None):
    """Nhà máy khởi tạo ứng dụng Flask"""
    app = Flask(__name__)

    app.config.update(
        SECRET_KEY=config.APP_SECRET_KEY,
        DATABASE_URL=config.DATABASE_URL,
        USE_REDIS=config.USE_REDIS,
        LOG_DIR=config.LOG_DIR,
        LOG_FILE_NAME=config.LOG_FILE_NAME,
        PERMANENT_SESSION_LIFETIME=timedelta(hours=config.SESSION_LIFETIME_HOURS),
        SESSION_COOKIE_NAME='distribusi_session',
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE='Lax',
        CACHE_DEFAULT_TIMEOUT=config.CACHE_DEFAULT_TIMEOUT,
        CACHE_KEY_PREFIX='distribusi_cache_',
    )
    if test_config:
        app.config.update(test_config)

    # KÍCH HOẠT LOGGING NGAY TẠI ĐÂY
    setup_production_logging(app)

    # --- SESSION + CACHE: Redis khi production, bộ nhớ khi dev/test ---
    redis_client = None
    if app.config['USE_REDIS']:
        try:
            redis_client = redis.Redis(host=config.REDIS_HOST, port=config.REDIS_PORT, db=0, decode_responses=True)
            redis_client.ping()
        except redis.RedisError as e:
            app.logger.error(f"Redis connection failed: {e}")
            redis_client = None

    if redis_client is not None:
        app.config['SESSION_TYPE'] = 'redis'
        app.config['SESSION_PERMANENT'] = True
        app.config['SESSION_USE_SIGNER'] = True
        app.config['SESSION_REDIS'] = redis.Redis(host=config.REDIS_HOST, port=config.REDIS_PORT, db=1)
        Session(app)

        app.config['CACHE_TYPE'] = 'RedisCache'
        app.config['CACHE_REDIS_HOST'] = config.REDIS_HOST
        app.config['CACHE_REDIS_PORT'] = config.REDIS_PORT
        app.config['CACHE_REDIS_DB'] = 2  # Tách biệt với Session DB 1
    else:
        app.config['CACHE_TYPE'] = 'SimpleCache'

    # Mỗi app có cache riêng (tránh dùng chung SimpleCache giữa các app test)
    app_cache = Cache()
    app_cache.init_app(app)
    app.cache = app_cache
    app.redis_client = redis_client

    # 3. KHỞI TẠO SERVICES (DEPENDENCY INJECTION)
    db_manager = DBManager(app.config['DATABASE_URL'])
    db_manager.ensure_schema()
    app.db_manager = db_manager

    app.goal_service = GoalService()
    app.settings_service = SettingsService(db_manager, app.cache)
    app.access_service = AccessService(config.ROLES, config.PAGE_ROLES, config.ROLE_AGENT_MAP)

    # 4. ĐĂNG KÝ BLUEPRINTS
    app.register_blueprint(goal_bp)
    app.register_blueprint(settings_bp)

    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({'success': True, 'app': config.APP_NAME, 'version': config.APP_VERSION})

    # =========================================================================
    # 5. GLOBAL AUDIT LOG MIDDLEWARE
    # =========================================================================
    @app.after_request
    def auto_audit_logger(response):
        # Bỏ qua các Method chỉ đọc dữ liệu (GET, OPTIONS, HEAD)
        if request.method not in ['POST', 'PUT', 'DELETE', 'PATCH']:
            return response

        user_code = session.get('user_code', 'GUEST/SYSTEM')
        ip_address = get_user_ip()

        payload = request.get_json(silent=True) or dict(request.form) or {}
        payload_str = json.dumps(payload, ensure_ascii=False, default=str)
        if len(payload_str) > 1000:
            payload_str = payload_str[:1000] + "...[TRUNCATED]"

        # Phân loại Mức độ
        severity = 'INFO'
        if response.status_code >= 400:
            severity = 'WARNING'
        if request.method == 'DELETE':
            severity = 'CRITICAL'

        app.db_manager.write_audit_log(
            user_code=user_code,
            action_type=f"AUTO_{request.method}",
            severity=severity,
            details=f"[{request.endpoint}] {request.path} | HTTP {response.status_code} | Data: {payload_str}",
            ip_address=ip_address
        )
        return response

    return app
