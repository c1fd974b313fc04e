import asyncio

import httpx
import pytest

from fake_odoo import FakeOdoo
from woo_odoo.odoo.odoo_session import NO_RESULT, NotAuthenticated, OdooSession

ODOO_URL = "https://odoo.test"


def _login(fake: FakeOdoo, password: str = "secret"):
    s = OdooSession(transport=fake.transport())
    return s, asyncio.run(s.authenticate(ODOO_URL + "/", "testdb", "bot@example.com", password))


def test_authenticate_cookie_wins_over_body():
    s, auth = _login(FakeOdoo(body_session="body-sid", cookie_session="cookie-sid"))
    assert auth.ok and auth
    assert auth.uid == 2
    assert s.session_id == "cookie-sid"
    assert s.base_url == ODOO_URL


def test_authenticate_body_session_when_no_cookie():
    s, auth = _login(FakeOdoo(body_session="body-sid", cookie_session=None))
    assert auth.ok
    assert s.session_id == "body-sid"


def test_authenticate_cookie_only():
    s, auth = _login(FakeOdoo(body_session=None, cookie_session="cookie-sid"))
    assert auth.ok
    assert s.session_id == "cookie-sid"


def test_invalid_password_is_a_failed_result_not_an_exception():
    fake = FakeOdoo()
    s, auth = _login(fake, password="wrong")
    assert not auth
    assert auth.invalid_credentials is True
    assert "Access Denied" in auth.reason
    assert s.session_id is None
    assert fake.auth_attempts == 1  # no retry


def test_authenticate_without_uid_fails():
    def handler(request):
        return httpx.Response(200, json={"jsonrpc": "2.0", "result": {"uid": False}})

    s = OdooSession(transport=httpx.MockTransport(handler))
    auth = asyncio.run(s.authenticate(ODOO_URL, "db", "u", "p"))
    assert not auth.ok
    assert auth.invalid_credentials is True
    assert "No UID" in auth.reason


def test_authenticate_transport_error_fails():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    s = OdooSession(transport=httpx.MockTransport(handler))
    auth = asyncio.run(s.authenticate(ODOO_URL, "db", "u", "p"))
    assert not auth.ok
    assert "unreachable" in auth.reason


def test_call_before_authenticate_raises():
    s = OdooSession(transport=FakeOdoo().transport())
    with pytest.raises(NotAuthenticated):
        asyncio.run(s.call("res.partner", "search_read", [[]], {}))
    with pytest.raises(NotAuthenticated):
        asyncio.run(s.search("res.partner", []))


def test_search_sends_id_only_limit_one(session, fake_odoo):
    fake_odoo.seed("res.partner", email="a@b.com")
    fake_odoo.seed("res.partner", email="a@b.com")

    rows = asyncio.run(session.search("res.partner", [["email", "=", "a@b.com"]]))

    assert len(rows) == 1
    assert set(rows[0]) == {"id"}
    model, method, args, kwargs = fake_odoo.calls[-1]
    assert (model, method) == ("res.partner", "search_read")
    assert args == [[["email", "=", "a@b.com"]]]
    assert kwargs == {"fields": ["id"], "limit": 1}


def test_search_no_match_is_empty(session):
    assert asyncio.run(session.search("product.product", [["default_code", "=", "nope"]])) == []


def test_remote_error_returns_no_result(session, fake_odoo):
    fake_odoo.fail_methods.add(("sale.order", "search_read"))
    assert asyncio.run(session.call("sale.order", "search_read", [[]], {})) is NO_RESULT
    assert asyncio.run(session.search("sale.order", [])) == []


def test_create_returns_id_or_none(session, fake_odoo):
    new_id = asyncio.run(session.create("product.product", {"name": "X", "default_code": "X"}))
    assert isinstance(new_id, int)
    assert fake_odoo.creates("product.product") == [{"name": "X", "default_code": "X"}]

    fake_odoo.fail_methods.add(("product.product", "create"))
    assert asyncio.run(session.create("product.product", {"name": "Y"})) is None


def test_expired_credential_degrades_to_no_result(session):
    session.session_id = "stale"
    assert asyncio.run(session.create("res.partner", {"name": "Z"})) is None


def test_html_error_page_returns_no_result(session):
    session.base_url = "https://odoo.test/wrong-prefix"
    assert asyncio.run(session.call("res.partner", "search_read", [[]], {})) is NO_RESULT
