# --- Global log sanitizers: HTML error pages and Odoo credentials -------------
import logging, re

_HTML_SIG_RE = re.compile(r'(?is)<!DOCTYPE html|<html[^>]*>')
_TITLE_RE    = re.compile(r'(?is)<title[^>]*>(.*?)</title>')
_TAG_RE      = re.compile(r'(?is)<[^>]+>')
_SCRIPT_RE   = re.compile(r'(?is)<(script|style)[^>]*>.*?</\1>')

# session_id=abc123 (cookie form) and "session_id": "abc123" / "password": "..." (JSON form)
_COOKIE_SID_RE = re.compile(r'(session_id=)[^;\s"\']+')
_JSON_SECRET_RE = re.compile(r'("(?:session_id|password)"\s*:\s*")[^"]*(")')
_REPR_SECRET_RE = re.compile(r"('(?:session_id|password)'\s*:\s*')[^']*(')")


def _strip_tags(s: str) -> str:
    s = _SCRIPT_RE.sub('', s)
    s = _TAG_RE.sub(' ', s)
    return re.sub(r'\s+', ' ', s).strip()


def _summarize_html(s: str, limit: int = 200) -> str:
    title = None
    m = _TITLE_RE.search(s)
    if m:
        title = _strip_tags(m.group(1))
    preview = title or _strip_tags(s)[:limit]
    return f"{preview} [HTML {len(s)} chars trimmed]"


def redact_secrets(s: str) -> str:
    s = _COOKIE_SID_RE.sub(r'\1<redacted>', s)
    s = _JSON_SECRET_RE.sub(r'\1<redacted>\2', s)
    return _REPR_SECRET_RE.sub(r'\1<redacted>\2', s)


class _HtmlTrimFilter(logging.Filter):
    """Odoo answers a wrong URL or database with a full HTML page; log a short summary instead."""
    def filter(self, record: logging.LogRecord) -> bool:
        try:
            msg = record.getMessage()
        except Exception:
            return True
        if isinstance(msg, str) and len(msg) > 200 and _HTML_SIG_RE.search(msg):
            record.msg = _summarize_html(msg)
            record.args = ()
        return True


class _SecretRedactFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        try:
            msg = record.getMessage()
        except Exception:
            return True
        if isinstance(msg, str) and ("session_id" in msg or "password" in msg):
            record.msg = redact_secrets(msg)
            record.args = ()
        return True


def install_log_filters(names=("", "uvicorn", "uvicorn.error")) -> None:
    for _name in names:
        lg = logging.getLogger(_name)
        if not any(isinstance(f, _HtmlTrimFilter) for f in lg.filters):
            lg.addFilter(_HtmlTrimFilter())
        if not any(isinstance(f, _SecretRedactFilter) for f in lg.filters):
            lg.addFilter(_SecretRedactFilter())


# install once on common loggers (root + uvicorn family)
install_log_filters()
# --------------------------------------------------------------------------------
