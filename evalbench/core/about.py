"""Static product information shown by the info overlay."""

from __future__ import annotations

from evalbench.core.models import AboutInfo, ResolvedTheme


TITLE = "Monkey Interpreter"
DESCRIPTION = "An online web application interpreter for the"
LANGUAGE_LABEL = "Monkey Lang"
LANGUAGE_URL = "https://monkeylang.org"
AUTHOR = "Mehul"
AUTHOR_URL = "https://github.com/mehulzr"

LOGO_URLS = {
    ResolvedTheme.LIGHT: "/web/logo-light.svg",
    ResolvedTheme.DARK: "/web/logo-dark.svg",
}


def about_info(resolved_theme: ResolvedTheme) -> AboutInfo:
    """Return the overlay content with the logo variant matching ``resolved_theme``."""
    return AboutInfo(
        title=TITLE,
        description=DESCRIPTION,
        language_label=LANGUAGE_LABEL,
        language_url=LANGUAGE_URL,
        author=AUTHOR,
        author_url=AUTHOR_URL,
        logo_url=LOGO_URLS[ResolvedTheme(resolved_theme)],
    )
