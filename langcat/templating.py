# langcat/templating.py
# Jinja2 integration: expose Translator.get to templates.

from __future__ import annotations

import os
from typing import Any

from fastapi.templating import Jinja2Templates
from jinja2 import Environment

from langcat.core.translator import Translator


def register_template_helpers(
    target: Environment | Jinja2Templates, translator: Translator, name: str = "i18n"
) -> Environment:
    """
    Register ``translator.get`` as a template global called ``name``.

    Accepts a plain Jinja2 Environment or FastAPI's Jinja2Templates. In a
    template: ``{{ i18n("menu.title") }}`` or ``{{ i18n("menu.title", lang) }}``.
    """
    env: Any = getattr(target, "env", target)
    env.globals[name] = translator.get
    return env


def create_templates(
    directory: str | os.PathLike[str], translator: Translator, name: str = "i18n"
) -> Jinja2Templates:
    """Build a Jinja2Templates instance with the lookup helper registered."""
    templates = Jinja2Templates(directory=directory)
    register_template_helpers(templates, translator, name)
    return templates
