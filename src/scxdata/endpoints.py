"""URL builders for the upstream read-only API."""

from __future__ import annotations

from scxdata.config import SCX_API_BASE, SCX_SITE_LANGUAGE


def menu_url(uid: str = "") -> str:
    return f"{SCX_API_BASE}/menu/{uid}?language={SCX_SITE_LANGUAGE}"


def leaf_url(uid: str) -> str:
    return f"{SCX_API_BASE}/suttaplex/{uid}?language={SCX_SITE_LANGUAGE}"


def segmented_translation_url(uid: str, author: str, lang: str) -> str:
    return f"{SCX_API_BASE}/bilarasuttas/{uid}/{author}?lang={lang}"


def suttas_url(uid: str, author: str, lang: str) -> str:
    return f"{SCX_API_BASE}/suttas/{uid}/{author}?lang={lang}&siteLanguage={SCX_SITE_LANGUAGE}"


def parallels_url(uid: str) -> str:
    return f"{SCX_API_BASE}/parallels/{uid}"


def publication_info_url(uid: str, lang: str, author: str) -> str:
    return f"{SCX_API_BASE}/publication_info/{uid}/{lang}/{author}"
