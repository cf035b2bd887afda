# -*- coding: utf-8 -*-
"""Reading and writing provider storage (providers.json)."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..constant import PROVIDERS_FILE, WORKING_DIR
from .errors import StorageCorruptError
from .models import StoreFile

logger = logging.getLogger(__name__)


def get_providers_json_path() -> Path:
    """Return the default providers.json path."""
    return WORKING_DIR / PROVIDERS_FILE


def _dump(doc: StoreFile) -> str:
    return json.dumps(doc.model_dump(mode="json"), indent=2, ensure_ascii=False)


class ProviderStore:
    """Whole-document access to providers.json.

    Callers always read the full document, modify it and write it back.
    There is no locking: two overlapping read-modify-write cycles race and
    the later write wins.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else get_providers_json_path()

    def ensure_initialized(self) -> None:
        """Create the storage file with empty defaults if it is missing.

        An existing file is never touched, including one created by a
        concurrent caller between the check and the create.
        """
        if self.path.is_file():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(self.path, "x", encoding="utf-8") as fh:
                fh.write(_dump(StoreFile()))
        except FileExistsError:
            return
        logger.info(f"Initialized provider storage at {self.path}")

    def read(self) -> StoreFile:
        """Load providers.json.

        A missing file is initialized and read as the empty default.

        Raises:
            StorageCorruptError: the file exists but is not valid JSON or
                does not have the expected shape.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                text = fh.read()
        except FileNotFoundError:
            self.ensure_initialized()
            return StoreFile()

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageCorruptError(self.path, str(exc)) from exc
        if not isinstance(raw, dict):
            raise StorageCorruptError(
                self.path,
                f"expected a JSON object, got {type(raw).__name__}",
            )
        try:
            return StoreFile.model_validate(raw)
        except ValidationError as exc:
            raise StorageCorruptError(self.path, str(exc)) from exc

    def write(self, doc: StoreFile) -> None:
        """Replace providers.json with *doc*.

        The document is written to a temporary file in the same directory
        and moved into place, so readers never see a half-written file.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            dir=self.path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(_dump(doc))
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug(
            f"Wrote provider storage: {len(doc.providers)} custom providers, "
            f"{len(doc.filtered_models)} filters",
        )


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


def mask_api_key(api_key: str, visible_chars: int = 4) -> str:
    """Mask an API key for safe display.

    Example: ``"sk-abcdefghijk"`` → ``"sk-****hijk"``
    """
    if not api_key:
        return ""
    if len(api_key) <= visible_chars:
        return "*" * len(api_key)
    prefix = api_key[:3] if len(api_key) > 3 else ""
    suffix = api_key[-visible_chars:]
    hidden_len = len(api_key) - len(prefix) - visible_chars
    return f"{prefix}{'*' * max(hidden_len, 4)}{suffix}"
