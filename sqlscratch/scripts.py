"""Reading and writing script files.

Legacy Oracle scripts are often Latin-1 or a Windows code page, so a
file that is not valid UTF-8 is decoded with the locale's encoding and
finally Latin-1, which accepts any byte sequence. The encoding a file was
read with is used again when it is saved.
"""

import locale
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

_logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"
FALLBACK_ENCODING = "latin-1"


@dataclass
class ScriptFile:
    """Text of a script and where it came from. ``path`` is None for scratch."""

    path: Optional[Path] = None
    text: str = ""
    encoding: str = DEFAULT_ENCODING


def read_script(path: Path) -> ScriptFile:
    """Load ``path``; a missing file gives an empty script at that path."""
    if not path.exists():
        return ScriptFile(path)

    for encoding in (DEFAULT_ENCODING, locale.getpreferredencoding(False)):
        try:
            return ScriptFile(path, path.read_text(encoding=encoding), encoding)
        except UnicodeDecodeError:
            _logger.debug("%s is not valid %s", path, encoding)

    _logger.info("Reading %s as %s", path, FALLBACK_ENCODING)
    return ScriptFile(path, path.read_text(encoding=FALLBACK_ENCODING), FALLBACK_ENCODING)


def write_script(script: ScriptFile) -> None:
    """Save ``script`` in its encoding, switching to UTF-8 if the text no longer fits."""
    try:
        script.text.encode(script.encoding)
    except UnicodeEncodeError:
        _logger.warning("%s cannot hold the new text as %s, saving as %s",
                        script.path, script.encoding, DEFAULT_ENCODING)
        script.encoding = DEFAULT_ENCODING
    script.path.write_text(script.text, encoding=script.encoding)
