from __future__ import annotations

import logging
import os
import stat
import uuid
from pathlib import Path

from savedata.domain.errors import PersistenceError
from savedata.infra.ports.storage import StoragePort

logger = logging.getLogger(__name__)


class FileStorage(StoragePort):
    def __init__(self, path: Path):
        self.path = Path(path)

    def persist(self, payload: bytes) -> None:
        tmp_path = self.path.parent / f".{self.path.name}.{uuid.uuid4().hex[:16]}.tmp"
        created = False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # 0o666 is masked by the process umask, same as a plain create.
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
            created = True
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            try:
                existing_mode = stat.S_IMODE(self.path.stat().st_mode)
            except FileNotFoundError:
                existing_mode = None
            if existing_mode is not None:
                os.chmod(tmp_path, existing_mode)
            os.replace(tmp_path, self.path)
            created = False
        except OSError as exc:
            raise PersistenceError(f"failed to write file {self.path}: {exc.strerror or exc}") from exc
        finally:
            if created:
                tmp_path.unlink(missing_ok=True)

        logger.info("Data saved to file %s (%d bytes)", self.path, len(payload))
