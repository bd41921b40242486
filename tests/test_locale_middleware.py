from __future__ import annotations

from pathlib import Path

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from langcat import Translator
from langcat.core.config import get_settings
from langcat.core.translator import get_translator
from langcat.middleware.locale import LocaleMiddleware, parse_accept_language, request_lang


@pytest.fixture
def translator(lang_dir: Path, write_lang, log) -> Translator:
    write_lang("en", {"page.title": "Welcome"})
    write_lang("de", {"page.title": "Willkommen"})
    write_lang("en-us", {"page.title": "Howdy"})
    return Translator(lang_dir=lang_dir, log=log)


def _make_app(translator: Translator | None) -> FastAPI:
    app = FastAPI()
    if translator is not None:
        app.add_middleware(LocaleMiddleware, translator=translator)

    @app.get("/title")
    def title(request: Request, lang: str = Depends(request_lang)) -> dict[str, str]:
        t = getattr(request.state, "translator", None) or get_translator()
        return {"lang": lang, "title": t.get("page.title", lang)}

    return app


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("de-DE,de;q=0.9,en;q=0.8", "de-DE"),
        ("fr;q=0.9, en", "fr"),
        ("  en-us  ", "en-us"),
        ("", ""),
        (None, ""),
    ],
)
def test_parse_accept_language(header, expected):
    assert parse_accept_language(header) == expected


def test_query_parameter_wins_and_sets_cookie(translator: Translator):
    client = TestClient(_make_app(translator))

    r = client.get("/title", params={"lang": "de"}, headers={"Accept-Language": "en"})

    assert r.status_code == 200
    assert r.json() == {"lang": "de", "title": "Willkommen"}
    assert r.cookies.get("lang") == "de"

    # Cookie is sent back on the next request
    r2 = client.get("/title")
    assert r2.json()["lang"] == "de"


def test_accept_language_matches_ignoring_case(translator: Translator):
    client = TestClient(_make_app(translator))

    r = client.get("/title", headers={"Accept-Language": "en-US,en;q=0.9"})

    assert r.json() == {"lang": "en-us", "title": "Howdy"}
    assert "lang" not in r.cookies


def test_unknown_language_uses_active_language(translator: Translator):
    translator.set_lang("de")
    client = TestClient(_make_app(translator))

    r = client.get("/title", params={"lang": "xx"}, headers={"Accept-Language": "pt-BR"})

    assert r.json() == {"lang": "de", "title": "Willkommen"}
    assert "lang" not in r.cookies


def test_requests_do_not_change_active_language(translator: Translator):
    client = TestClient(_make_app(translator))

    client.get("/title", params={"lang": "de"})

    assert translator.active_language == "en"


def test_request_lang_without_middleware_uses_shared_translator():
    get_settings.cache_clear()
    get_translator.cache_clear()
    try:
        client = TestClient(_make_app(None))
        r = client.get("/title")
        assert r.json() == {"lang": "en", "title": "page.title"}
    finally:
        get_translator.cache_clear()
        get_settings.cache_clear()
