from __future__ import annotations

from datetime import datetime
from typing import Mapping, Union
from urllib.parse import parse_qs, urlencode, urlsplit

from verse.schemas import Poem

SHARE_FIELDS = ("text", "style", "prompt", "doom", "date")


class ShareLinkError(ValueError):
    """A shared poem link is missing a field or carries an unparsable value."""


def encode_share_link(poem: Poem, base_url: str = "") -> str:
    query = urlencode(
        {
            "text": poem.text,
            "style": poem.style,
            "prompt": poem.prompt,
            "doom": str(poem.doom),
            "date": poem.date.isoformat(),
        }
    )
    return f"{base_url}?{query}"


def _single(
    params: Mapping[str, Union[str, list]], name: str, allow_blank: bool = False
) -> str:
    value = params.get(name)
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None or (not allow_blank and not str(value).strip()):
        raise ShareLinkError(f"Shared poem is missing '{name}'.")
    return str(value)


def poem_from_params(params: Mapping[str, Union[str, list]]) -> Poem:
    """
    Build a Poem from share-link query parameters, checking each field.

    Accepts plain string values (e.g. Streamlit's query params) or the
    list values produced by parse_qs.
    """
    text = _single(params, "text")
    # A poem may carry an empty style or prompt; only the key is required.
    style = _single(params, "style", allow_blank=True)
    prompt = _single(params, "prompt", allow_blank=True)

    raw_doom = _single(params, "doom").strip()
    try:
        doom = int(raw_doom)
    except ValueError:
        raise ShareLinkError(f"Shared poem has an invalid 'doom': {raw_doom!r}") from None
    if not 0 <= doom <= 100:
        raise ShareLinkError(f"Shared poem 'doom' must be between 0 and 100, got {doom}.")

    raw_date = _single(params, "date").strip()
    try:
        date = datetime.fromisoformat(raw_date)
    except ValueError:
        raise ShareLinkError(f"Shared poem has an invalid 'date': {raw_date!r}") from None

    return Poem(text=text, style=style, prompt=prompt, doom=doom, date=date)


def decode_share_link(link: str) -> Poem:
    if not link or not link.strip():
        raise ShareLinkError("Share link is empty.")

    link = link.strip()
    query = urlsplit(link).query if "?" in link else link
    return poem_from_params(parse_qs(query, keep_blank_values=True))
