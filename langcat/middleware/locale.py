from __future__ import annotations

from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from langcat.core.translator import Translator, get_translator

COOKIE_MAX_AGE = 60 * 60 * 24 * 365


def parse_accept_language(header: str | None) -> str:
    """Return the first tag of an Accept-Language header ('' if none)."""
    if not header:
        return ""
    preferred = header.split(";", 1)[0]
    return preferred.split(",", 1)[0].strip()


def match_language(translator: Translator, tag: str | None) -> str | None:
    """Return the loaded language matching ``tag`` exactly or ignoring case."""
    if not tag:
        return None
    languages = translator.languages
    if tag in languages:
        return tag
    folded = tag.casefold()
    for lang in languages:
        if lang.casefold() == folded:
            return lang
    return None


class LocaleMiddleware(BaseHTTPMiddleware):
    """Choose a language per request and store it in ``request.state.lang``.

    Sources, first match wins:
        1) ``?lang=`` query parameter (also remembered in a cookie)
        2) ``lang`` cookie
        3) first tag of the Accept-Language header
        4) the translator's active language

    The translator's active language is left untouched; handlers resolve text
    with ``translator.get(key, request.state.lang)``.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        translator: Translator | None = None,
        param: str = "lang",
    ) -> None:
        super().__init__(app)
        self.translator = translator
        self.param = param

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        translator = self.translator or get_translator()
        query_lang = match_language(translator, request.query_params.get(self.param))

        lang = (
            query_lang
            or match_language(translator, request.cookies.get(self.param))
            or match_language(
                translator, parse_accept_language(request.headers.get("accept-language"))
            )
            or translator.active_language
        )
        request.state.lang = lang
        request.state.translator = translator

        response = await call_next(request)
        if query_lang:
            response.set_cookie(
                self.param,
                query_lang,
                max_age=COOKIE_MAX_AGE,
                httponly=False,
                samesite="lax",
            )
        return response


def request_lang(request: Request) -> str:
    """FastAPI dependency: the language chosen for this request."""
    lang = getattr(request.state, "lang", None)
    if lang:
        return lang
    return get_translator().active_language
