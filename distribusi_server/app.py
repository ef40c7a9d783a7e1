# app.py
# --- PHIÊN BẢN APPLICATION FACTORY ---

from factory import create_app

# KHỞI TẠO APP TỪ NHÀ MÁY
app = create_app()


# =========================================================================
# MAIN
# =========================================================================
if __name__ == '__main__':
    print("!!! CẢNH BÁO: ĐANG CHẠY CHẾ ĐỘ DEV. KHÔNG DÙNG CHO PRODUCTION !!!")
    app.run(debug=True, host='0.0.0.0', port=5000)
