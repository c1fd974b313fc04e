#===========================================================================
# woo_odoo/odoo/odoo_session.py
# Odoo JSON-RPC session client.
# One instance per sync run: authenticate once, then issue call_kw requests
# carrying the session cookie.
#===========================================================================

from __future__ import annotations

import itertools
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import httpx

logger = logging.getLogger("uvicorn.error")

# Returned by call() when the remote side reported an error or never answered.
NO_RESULT = None

AUTH_PATH = "/web/session/authenticate"
CALL_KW_PATH = "/web/dataset/call_kw"


class NotAuthenticated(RuntimeError):
    pass


@dataclass
class AuthResult:
    ok: bool
    uid: Optional[int] = None
    reason: Optional[str] = None
    invalid_credentials: bool = False

    def __bool__(self) -> bool:
        return self.ok


def _json_or_text(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except Exception:
        return resp.text


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        data = error.get("data") or {}
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        if error.get("message"):
            return str(error["message"])
    return "Unknown error"


def _is_access_denied(error: Any) -> bool:
    if not isinstance(error, dict):
        return False
    data = error.get("data") or {}
    name = str(data.get("name") or "") if isinstance(data, dict) else ""
    return "AccessDenied" in name or "Access Denied" in _error_message(error)


class OdooSession:
    """
    Stateful Odoo client. The session credential lives on the instance only,
    so each run owns its own session and nothing is shared through globals.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        verify: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url: str = ""
        self.database: str = ""
        self.uid: Optional[int] = None
        self.session_id: Optional[str] = None
        self._timeout = timeout
        self._verify = verify
        self._transport = transport
        self._ids = itertools.count(1)

    @property
    def authenticated(self) -> bool:
        return bool(self.session_id)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, verify=self._verify, transport=self._transport)

    def _envelope(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {"jsonrpc": "2.0", "method": "call", "id": next(self._ids), "params": params}

    # --- Authentication ----------------------------------------------------

    async def authenticate(self, endpoint: str, database: str, login: str, password: str) -> AuthResult:
        """
        Log in through /web/session/authenticate and keep the session credential.

        Odoo puts the credential in the response body on some versions and only in
        the session_id cookie on others; the cookie wins when both are present.
        Rejections come back as a failed AuthResult, never as an exception.
        """
        self.base_url = (endpoint or "").rstrip("/")
        self.database = database
        self.uid = None
        self.session_id = None

        logger.info("[ODOO] authenticating db=%s login=%s", database, login)
        payload = self._envelope({"db": database, "login": login, "password": password})
        try:
            async with self._client() as client:
                r = await client.post(f"{self.base_url}{AUTH_PATH}", json=payload)
        except httpx.HTTPError as e:
            logger.error("[ODOO] authentication transport error: %s", e)
            return AuthResult(ok=False, reason=f"Odoo unreachable: {e}")

        data = _json_or_text(r)
        if r.status_code >= 400 or not isinstance(data, dict):
            logger.error("[ODOO] authentication HTTP %s: %s", r.status_code, data)
            return AuthResult(ok=False, reason=f"HTTP {r.status_code}")

        if data.get("error"):
            error = data["error"]
            logger.error("[ODOO] authentication error: %s", json.dumps(error, default=str))
            return AuthResult(
                ok=False,
                reason=_error_message(error),
                invalid_credentials=_is_access_denied(error),
            )

        result = data.get("result") or {}
        uid = result.get("uid") if isinstance(result, dict) else None
        if not uid:
            return AuthResult(ok=False, reason="No UID returned", invalid_credentials=True)

        session_id = result.get("session_id") or None
        cookie_sid = r.cookies.get("session_id")
        if cookie_sid:
            session_id = cookie_sid
        if not session_id:
            return AuthResult(ok=False, uid=uid, reason="no session_id in body or cookie")

        self.uid = uid
        self.session_id = session_id
        logger.info("[ODOO] authenticated uid=%s", uid)
        return AuthResult(ok=True, uid=uid)

    # --- Generic RPC -------------------------------------------------------

    async def call(
        self,
        model: str,
        method: str,
        args: Optional[Sequence[Any]] = None,
        kwargs: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Invoke model.method through call_kw. Remote or transport failures are
        logged and yield NO_RESULT; callers read that as "did not happen".
        """
        if not self.session_id:
            raise NotAuthenticated("Not authenticated. Call authenticate() first.")

        payload = self._envelope({
            "model": model,
            "method": method,
            "args": list(args or []),
            "kwargs": dict(kwargs or {}),
        })
        headers = {"Cookie": f"session_id={self.session_id}"}
        try:
            async with self._client() as client:
                r = await client.post(f"{self.base_url}{CALL_KW_PATH}", json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error("[ODOO] %s.%s transport error: %s", model, method, e)
            return NO_RESULT

        data = _json_or_text(r)
        if r.status_code >= 400 or not isinstance(data, dict):
            logger.error("[ODOO] %s.%s HTTP %s: %s", model, method, r.status_code, data)
            return NO_RESULT
        if data.get("error"):
            logger.error("[ODOO] %s.%s error: %s", model, method, json.dumps(data["error"], default=str))
            return NO_RESULT
        return data.get("result")

    # --- Convenience wrappers ---------------------------------------------

    async def search(self, model: str, domain: List[Any], limit_one: bool = True) -> List[Dict[str, Any]]:
        kwargs: Dict[str, Any] = {"fields": ["id"]}
        if limit_one:
            kwargs["limit"] = 1
        result = await self.call(model, "search_read", [domain], kwargs)
        return result if isinstance(result, list) else []

    async def create(self, model: str, values: Dict[str, Any]) -> Optional[int]:
        result = await self.call(model, "create", [values], {})
        if isinstance(result, list) and len(result) == 1:
            result = result[0]
        if isinstance(result, int) and not isinstance(result, bool):
            return result
        return None
