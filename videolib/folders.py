import json
import logging
import os
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


def normalize_folder(folder: str) -> str:
    return os.path.abspath(os.path.expanduser(folder.strip()))


class FolderConfig:
    """JSON file listing the watched folders, re-read on every call."""

    def __init__(self, data_dir: str):
        self.config_path = Path(data_dir) / CONFIG_FILENAME

    def ensure(self):
        if not self.config_path.exists():
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self._write([])

    def load(self) -> List[str]:
        if not self.config_path.exists():
            return []
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s: %s", self.config_path, e)
            return []

        folders = config.get("folders") if isinstance(config, dict) else None
        if not isinstance(folders, list):
            return []

        # keep first occurrence, config order
        seen = []
        for f in folders:
            if isinstance(f, str) and f not in seen:
                seen.append(f)
        return seen

    def _write(self, folders: List[str]):
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump({"folders": folders}, f, indent=2)

    def add(self, folder: str) -> List[str]:
        folder = normalize_folder(folder)
        folders = self.load()
        if folder not in folders:
            folders.append(folder)
            self._write(folders)
            logger.info("Added folder %s", folder)
        return folders

    def remove(self, folder: str) -> List[str]:
        # only the config entry goes away, files on disk are untouched
        targets = {folder, normalize_folder(folder)}
        folders = [f for f in self.load() if f not in targets]
        self._write(folders)
        logger.info("Removed folder %s", folder)
        return folders
