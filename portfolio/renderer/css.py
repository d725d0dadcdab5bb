"""
Générateur CSS — variables :root + SCSS compilé (libsass).

Pipeline :
  generate_css_variables(theme)  →  :root { --color-accent: ...; ... }
  get_compiled_scss()            →  reset + pages + blocs + templates (compilé une fois)
  generate_page_css(theme)       →  variables + SCSS
"""
from pathlib import Path
from typing import Optional

import sass

_SCSS_CACHE: dict = {}
_SCSS_DIR = Path(__file__).parent.parent / "scss"

DEFAULT_THEME = {
    "accent":      "#2563eb",
    "text":        "#111827",
    "text_light":  "#4b5563",
    "bg":          "#ffffff",
    "bg_subtle":   "#f9fafb",
    "border":      "#e5e7eb",
    "font_family": "Inter",
}


def get_compiled_scss() -> str:
    """Compile main.scss une seule fois, met en cache."""
    if "main" not in _SCSS_CACHE:
        _SCSS_CACHE["main"] = sass.compile(
            filename=str(_SCSS_DIR / "main.scss"),
            output_style="compressed",
        )
    return _SCSS_CACHE["main"]


def generate_css_variables(theme: Optional[dict] = None) -> str:
    t = {**DEFAULT_THEME, **(theme or {})}
    return f""":root {{
  --color-accent:     {t["accent"]};
  --color-text:       {t["text"]};
  --color-text-light: {t["text_light"]};
  --color-bg:         {t["bg"]};
  --color-bg-subtle:  {t["bg_subtle"]};
  --color-border:     {t["border"]};
  --font-family-body: '{t["font_family"]}', system-ui, sans-serif;
}}"""


def generate_page_css(theme: Optional[dict] = None) -> str:
    return generate_css_variables(theme) + "\n\n" + get_compiled_scss()
