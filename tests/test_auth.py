"""Tests connexion admin — mot de passe, session serveur, déconnexion."""
from sitecms.api.auth import SESSION_COOKIE
from sitecms.database import SessionLocal, db_create_session, db_get_session, init_db


def _login(client, password):
    return client.post("/admin/login", data={"password": password}, follow_redirects=False)


def test_login_page(anon):
    r = anon.get("/admin/login")
    assert r.status_code == 200
    assert 'name="password"' in r.text
    assert "incorrect" in anon.get("/admin/login?error=1").text


def test_wrong_password(anon):
    r = _login(anon, "nope")
    assert r.status_code == 303
    assert r.headers["location"] == "/admin/login?error=1"
    assert SESSION_COOKIE not in anon.cookies


def test_login_opens_session(anon):
    r = _login(anon, "s3cret")
    assert r.status_code == 303
    assert r.headers["location"] == "/admin"
    assert anon.cookies.get(SESSION_COOKIE)
    assert anon.get("/api/admin/files").status_code == 200


def test_logout_closes_session(anon):
    _login(anon, "s3cret")
    token = anon.cookies.get(SESSION_COOKIE)
    r = anon.get("/admin/logout", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/admin/login"
    db = SessionLocal()
    try:
        assert db_get_session(db, token) is None
    finally:
        db.close()
    assert anon.get("/api/admin/files").status_code == 403


def test_expired_session_purged():
    init_db()
    db = SessionLocal()
    try:
        s = db_create_session(db, hours=0)
        assert db_get_session(db, s.token) is None
        assert db_get_session(db, "") is None
    finally:
        db.close()
