"""Ledger state repository: the whole state as one JSON blob, rewritten atomically."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Union

from kitchen.domain.LedgerState import LedgerState
from kitchen.infra.paths import STATE_FILE

logger = logging.getLogger(__name__)


class StateRepository:
    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else STATE_FILE

    def load(self) -> LedgerState:
        """Read the saved ledger; a missing or corrupt file yields an empty ledger."""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.warning("Ledger file not found: %s. Starting with an empty ledger.", self.path)
            return LedgerState()
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in ledger file %s: %s", self.path, e)
            return LedgerState()
        if not isinstance(data, dict):
            logger.error("Ledger file %s does not hold an object; ignoring it", self.path)
            return LedgerState()
        return LedgerState.from_dict(data)

    def save(self, state: LedgerState) -> None:
        self._atomic_write(state.to_dict())
        logger.debug("Saved ledger to %s", self.path)

    def _atomic_write(self, data: dict):
        os.makedirs(self.path.parent, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".ledger_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(data, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)


__all__ = ['StateRepository']
