from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from core.logging_setup import setup_logger
from core.safe_call import safe_call
from core.storage import Storage
from verse.doom import doom_score
from verse.forms import validate
from verse.schemas import Poem, ValidationResult

EMPTY_POEM_MESSAGE = "Your poem is empty! Write something to save."
SAVED_MESSAGE = "Poem saved successfully!"
SAVED_SESSION_ONLY_MESSAGE = "Poem saved for this session, but it could not be stored."


@dataclass
class SaveOutput:
    ok: bool
    message: str
    poems: List[Poem] = field(default_factory=list)
    poem: Optional[Poem] = None


def load_saved_poems(storage: Storage) -> List[Poem]:
    logger = setup_logger()
    res = safe_call(
        logger,
        user_error="Could not load your saved poems.",
        fn=storage.load_poems,
        operation="load_poems",
    )
    if not res.ok:
        return []
    return list(res.value)


def check_form(style: str, text: str) -> ValidationResult:
    logger = setup_logger()
    result = validate(style, text)
    logger.debug(f"form_checked style={style!r} valid={result.valid}")
    return result


def save_poem(
    storage: Storage,
    saved: Sequence[Poem],
    *,
    text: str,
    style: str,
    prompt: str,
    now: Optional[datetime] = None,
) -> SaveOutput:
    logger = setup_logger()

    if not (text or "").strip():
        return SaveOutput(ok=False, message=EMPTY_POEM_MESSAGE, poems=list(saved))

    verdict = validate(style, text)
    if not verdict.valid:
        logger.info(f"poem_rejected style={style!r} reason={verdict.message!r}")
        return SaveOutput(ok=False, message=verdict.message, poems=list(saved))

    poem = Poem(
        text=text,
        style=style,
        prompt=prompt,
        doom=doom_score(text),
        date=now or datetime.now(timezone.utc),
    )
    poems = [poem, *saved]

    res = safe_call(
        logger,
        user_error=SAVED_SESSION_ONLY_MESSAGE,
        fn=lambda: storage.save_poems(poems),
        operation="save_poems",
    )
    if not res.ok:
        return SaveOutput(ok=True, message=res.error_user, poems=poems, poem=poem)

    logger.info(f"poem_saved style={style!r} doom={poem.doom} total={len(poems)}")
    return SaveOutput(ok=True, message=SAVED_MESSAGE, poems=poems, poem=poem)
