"""Project registry: the project names time may be tracked against."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from chron.models import BREAK_PROJECT
from chron.store import MalformedRecordError, StoreIOError

logger = logging.getLogger(__name__)


class ProjectList(BaseModel):
    """On-disk shape of the registry file."""

    model_config = ConfigDict(extra="forbid")

    projects: list[str]


class ProjectRegistry:
    """
    Insertion-ordered set of project names persisted as ``{"projects": [...]}``.

    The file is read on every query and rewritten on every mutation; the
    ``break`` sentinel is always valid and never stored.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _load(self) -> list[str]:
        if not self.path.is_file():
            logger.debug("No registry at %s, creating an empty one", self.path)
            self._save([])
            return []

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreIOError(f"Failed to read {self.path}: {exc}") from exc

        try:
            document = ProjectList.model_validate(json.loads(raw))
        except json.JSONDecodeError as exc:
            raise MalformedRecordError(f"{self.path} is not valid JSON: {exc}") from exc
        except ValidationError as exc:
            raise MalformedRecordError(f"{self.path} is not a valid project list: {exc}") from exc

        # dict.fromkeys keeps first-seen order while dropping duplicates
        return list(dict.fromkeys(document.projects))

    def _save(self, projects: list[str]) -> None:
        content = json.dumps(ProjectList(projects=projects).model_dump(), ensure_ascii=False)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise StoreIOError(f"Failed to write {self.path}: {exc}") from exc

    def list(self) -> list[str]:
        """Return the registered project names in insertion order."""
        return self._load()

    def add(self, name: str) -> bool:
        """
        Register a project.

        Args:
            name: The project name.

        Returns:
            True if the project was added, False if it was already known
            (or is the break sentinel).
        """
        projects = self._load()
        if name == BREAK_PROJECT or name in projects:
            return False
        projects.append(name)
        self._save(projects)
        logger.info("Added project %r", name)
        return True

    def remove(self, name: str) -> bool:
        """Unregister a project; returns False if it was not registered."""
        projects = self._load()
        if name not in projects:
            return False
        projects.remove(name)
        self._save(projects)
        logger.info("Removed project %r", name)
        return True

    def __contains__(self, name: object) -> bool:
        return name in self._load()
