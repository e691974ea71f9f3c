import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from staycalc.domain.workspace import STATE_VERSION, Workspace
from staycalc.repository.migrations import migrate_state

logger = logging.getLogger(__name__)


class StateLoadError(ValueError):
    pass


class StateStore:
    def __init__(self, state_file: str):
        self.state_file = Path(state_file)

    def load(self) -> Workspace | None:
        if not self.state_file.exists():
            return None

        try:
            with self.state_file.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise StateLoadError(f"State file is not valid JSON: {self.state_file}") from exc

        if not isinstance(data, dict) or data.get("version") != STATE_VERSION:
            logger.warning("Ignoring state file %s with unsupported version", self.state_file)
            return None

        try:
            return Workspace.model_validate(migrate_state(data))
        except ValidationError as exc:
            raise StateLoadError(f"State file does not match the workspace layout: {exc}") from exc

    def save(self, workspace: Workspace) -> Path:
        self.state_file.parent.mkdir(parents=True, exist_ok=True)

        with tempfile.NamedTemporaryFile(
            mode="w",
            suffix=".json",
            prefix=f"{self.state_file.stem}_",
            dir=self.state_file.parent,
            delete=False,
            encoding="utf-8",
        ) as fp:
            tmp_path = Path(fp.name)
            try:
                fp.write(workspace.model_dump_json(indent=2))
            except BaseException:
                fp.close()
                tmp_path.unlink(missing_ok=True)
                raise

        try:
            os.replace(tmp_path, self.state_file)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug("Saved workspace to %s", self.state_file)
        return self.state_file
