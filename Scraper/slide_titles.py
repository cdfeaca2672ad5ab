#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Workshop display names.

Links to Google Slides decks are fetched and the deck title is scraped from
the page <title>. Any other link gets a name built from the key itself
("intro-to-git" -> "Intro To Git").
"""

import re
import string
from typing import Optional
from urllib.parse import urlparse

import requests

from Processing.link_keys import Workshop

SLIDES_LINK_PART = "docs.google.com/presentation"

# Hosts that never carry a workshop deck; checked before any fetch
NON_WORKSHOP_HOSTS = ("codepen", "colab")

GOOGLE_TITLE_SUFFIXES = (
    " - Google Slides",
    " - Google Docs",
    " - Google Drive",
    "- Google Slides",
    "- Google Docs",
)

TITLE_RE = re.compile(r"<title>(.*?)</title>", re.IGNORECASE)

# -------------------------
# Errors
# -------------------------

class LinkSkipped(Exception):
    """A link that does not produce a workshop entry."""

class InvalidLinkError(LinkSkipped):
    pass

class NotAWorkshopError(LinkSkipped):
    pass

class LinkFetchError(LinkSkipped):
    pass

class MissingTitleError(LinkSkipped):
    pass

class PageUnavailableError(LinkSkipped):
    pass

# -------------------------
# Helpers
# -------------------------

def name_from_key(name: str) -> str:
    words = name.replace("-", " ").split()
    out = []
    for word in words:
        if word[0] in string.ascii_letters:
            word = word[0].upper() + word[1:]
        out.append(word)
    return " ".join(out)

def clean_google_title(title: str) -> str:
    title = title.strip()
    for suffix in GOOGLE_TITLE_SUFFIXES:
        if title.endswith(suffix):
            title = title[: -len(suffix)]
    title = title.replace("&amp;", "&")
    return title.strip()

def is_slides_link(link: str) -> bool:
    return SLIDES_LINK_PART in link

def check_workshop_link(link: str) -> None:
    """Reject links that cannot be workshops without touching the network."""
    try:
        parsed = urlparse(link)
    except ValueError as e:
        raise InvalidLinkError(f"invalid url {link}: {e}") from e

    # host[:port], without any user:password@ prefix
    host = parsed.netloc.rpartition("@")[2]
    if "forms" in parsed.path or any(h in host for h in NON_WORKSHOP_HOSTS):
        raise NotAWorkshopError(f"not a workshop: {link}")

def classify_title(title: str, link: str) -> str:
    if "Sign in" in title:
        raise PageUnavailableError(f"link not publicly accessible: {link}")
    if "Page Not Found" in title:
        raise PageUnavailableError(f"workshop unavailable: {link}")
    if "Access Denied" in title:
        raise PageUnavailableError(f"public access is denied: {link}")
    return title

# -------------------------
# Fetching
# -------------------------

def fetch_slide_title(link: str, timeout: Optional[float] = None) -> str:
    """Fetch a slides deck and return its cleaned page title."""
    try:
        response = requests.get(link, stream=True, timeout=timeout)
    except requests.RequestException as e:
        raise LinkFetchError(f"error fetching {link}: {e}") from e

    with response:
        if response.status_code != 200:
            raise LinkFetchError(f"unexpected status {response.status_code} from {link}")
        try:
            body = response.text
        except requests.RequestException as e:
            raise LinkFetchError(f"unable to read body of {link}: {e}") from e

    m = TITLE_RE.search(body)
    if not m:
        raise MissingTitleError(f"no title found at {link}")

    return clean_google_title(m.group(1))

def resolve_name(workshop: Workshop, timeout: Optional[float] = None, offline: bool = False) -> Workshop:
    """
    Return the workshop with its final display name.

    Raises a LinkSkipped subclass when the link should not become an entry.
    With offline=True slide decks are named from the key instead of fetched.
    """
    check_workshop_link(workshop.link)

    if offline or not is_slides_link(workshop.link):
        return workshop.model_copy(update={"name": name_from_key(workshop.name)})

    title = fetch_slide_title(workshop.link, timeout=timeout)
    return workshop.model_copy(update={"name": classify_title(title, workshop.link)})
