"""Placeholder substitution for stub paths and file contents.

All placeholders are replaced in a single pass with one combined pattern, so
a substituted value is never scanned again.  ``{Module}{module}`` therefore
always becomes two independent substitutions, whatever the values contain.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path

from .errors import IOFailure


class ContentRewriter:
    """Replaces every known placeholder in text, bytes or files.

    The matcher is compiled once per token table.  Alternatives are ordered
    longest first so that overlapping keys resolve to the longest match at
    any given position.
    """

    def __init__(self, tokens: Mapping[str, str]) -> None:
        self.tokens = dict(tokens)
        self._pattern = _compile(self.tokens)

    # -- Text ---------------------------------------------------------------

    def rewrite(self, content: str) -> str:
        """Return *content* with every placeholder replaced."""
        if self._pattern is None:
            return content
        return self._pattern.sub(lambda m: self.tokens[m.group(0)], content)

    def rewrite_bytes(self, data: bytes) -> bytes:
        """Rewrite UTF-8 *data*; anything that is not valid UTF-8 is returned as is."""
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            return data
        return self.rewrite(text).encode("utf-8")

    # -- Files --------------------------------------------------------------

    def rewrite_file(self, path: str | Path) -> bool:
        """Rewrite a file in place.

        Returns:
            ``True`` if the file content changed.

        Raises:
            IOFailure: If the file cannot be read or written.
        """
        file_path = Path(path)
        try:
            with file_path.open("rb") as fh:
                original = fh.read()
            rewritten = self.rewrite_bytes(original)
            if rewritten == original:
                return False
            with file_path.open("wb") as fh:
                fh.write(rewritten)
        except OSError as exc:
            raise IOFailure(file_path, "Failed to rewrite file") from exc
        return True

    def copy_file(self, source: str | Path, destination: str | Path) -> None:
        """Copy *source* to *destination*, rewriting placeholders on the way.

        Raises:
            IOFailure: If either side of the copy fails.
        """
        src = Path(source)
        dest = Path(destination)
        try:
            with src.open("rb") as fh:
                data = fh.read()
        except OSError as exc:
            raise IOFailure(src, "Failed to read stub") from exc
        try:
            with dest.open("wb") as fh:
                fh.write(self.rewrite_bytes(data))
        except OSError as exc:
            raise IOFailure(dest, "Failed to write file") from exc


def substitute(content: str, tokens: Mapping[str, str]) -> str:
    """One-off convenience wrapper around :meth:`ContentRewriter.rewrite`."""
    return ContentRewriter(tokens).rewrite(content)


def _compile(tokens: Mapping[str, str]) -> re.Pattern[str] | None:
    if not tokens:
        return None
    keys = sorted(tokens, key=len, reverse=True)
    return re.compile("|".join(re.escape(key) for key in keys))
