from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from errors import InvalidConfigurationError
from interfaces import SettingsStorage
from util import VAULT_ROOT, normalize_path


NO_GROUPING = "NoGrouping"
GROUP_BY_YEAR = "Year"
GROUP_BY_MONTH = "Month"

ARCHIVE_FOLDER_GROUPINGS = (NO_GROUPING, GROUP_BY_YEAR, GROUP_BY_MONTH)

GROUPING_LABELS = {
	NO_GROUPING: "Don't group my files",
	GROUP_BY_YEAR: "Group by year file is archived",
	GROUP_BY_MONTH: "Group by year and month file is archived",
}

DEFAULT_CONFIG_FILENAME = ".note-archiver.yaml"

# camelCase keys used by the Obsidian plugin's data.json
_KEY_ALIASES = {
	"archiveFolderName": "archive_folder_name",
}


def validate_grouping(value: Any) -> str:
	"""Return `value` unchanged if it names a known grouping, else reject it."""
	if not isinstance(value, str) or value not in ARCHIVE_FOLDER_GROUPINGS:
		raise InvalidConfigurationError(
			f"Unable to parse grouping from value {value!r}; "
			f"expected one of {', '.join(ARCHIVE_FOLDER_GROUPINGS)}"
		)
	return value


def normalize_folder_name(value: Any) -> str:
	"""Normalize a user-entered archive folder; the vault root is not allowed."""
	if not isinstance(value, str):
		raise InvalidConfigurationError(f"archive folder must be text, got {type(value).__name__}")
	folder = normalize_path(value)
	if folder == VAULT_ROOT:
		raise InvalidConfigurationError("archive folder must not be empty or the vault root")
	return folder


###############################################################################
# Settings snapshot
###############################################################################

@dataclass(frozen=True)
class ArchiveConfig:
	"""
	Immutable snapshot of the archive settings.

	An archive run reads exactly one snapshot up front, so editing the
	settings while a file is being moved never changes its destination.
	"""

	version: str = "0.1.0"
	archive_folder_name: str = "Archive"
	grouping: str = NO_GROUPING

	def __post_init__(self):
		validate_grouping(self.grouping)
		object.__setattr__(self, "archive_folder_name", normalize_folder_name(self.archive_folder_name))
		object.__setattr__(self, "version", str(self.version))

	def to_dict(self) -> Dict[str, Any]:
		return asdict(self)


DEFAULT_CONFIG = ArchiveConfig()


def merge_config(raw: Optional[Dict[str, Any]]) -> ArchiveConfig:
	"""
	Merge a persisted mapping over the built-in defaults, field by field.

	Missing fields fall back to defaults; unknown keys are ignored.
	A grouping outside the known set is rejected rather than coerced.
	"""
	if raw is None:
		return DEFAULT_CONFIG
	if not isinstance(raw, dict):
		raise InvalidConfigurationError(
			f"settings must be a mapping, got {type(raw).__name__}"
		)

	values: Dict[str, Any] = {}
	for key, val in raw.items():
		values[_KEY_ALIASES.get(key, key)] = val

	fields = {
		key: values[key]
		for key in ("version", "archive_folder_name", "grouping")
		if key in values
	}
	# ArchiveConfig validates and normalizes on construction
	return replace(DEFAULT_CONFIG, **fields)


###############################################################################
# YAML persistence
###############################################################################

class YamlSettingsStorage:
	def __init__(self, path: Path):
		"""Persist settings as a small YAML mapping on disk."""
		self.path = Path(path)

	def load(self) -> Optional[Dict[str, Any]]:
		"""Return the stored mapping; a missing or empty file means nothing stored."""
		if not self.path.exists():
			return None
		with self.path.open("r", encoding="utf-8") as f:
			return yaml.safe_load(f)

	def save(self, data: Dict[str, Any]):
		"""Overwrite the settings file with `data`."""
		self.path.parent.mkdir(parents=True, exist_ok=True)
		with self.path.open("w", encoding="utf-8") as f:
			yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)


def load_config(path: str | Path) -> ArchiveConfig:
	"""Read a YAML settings file (if any) and return the merged snapshot."""
	return merge_config(YamlSettingsStorage(Path(path)).load())


###############################################################################
# Settings store
###############################################################################

class SettingsStore:
	"""
	Owns the current settings and writes them back after every change.

	Mutators validate first and only then replace the snapshot and
	persist, so a rejected value leaves both memory and storage untouched.
	"""

	def __init__(self, storage: SettingsStorage):
		self.storage = storage
		self._config = merge_config(storage.load())

	def snapshot(self) -> ArchiveConfig:
		"""Return the current immutable settings."""
		return self._config

	def set_archive_folder_name(self, value: str) -> ArchiveConfig:
		folder = normalize_folder_name(value)
		return self._commit(replace(self._config, archive_folder_name=folder))

	def set_grouping(self, value: str) -> ArchiveConfig:
		grouping = validate_grouping(value)
		return self._commit(replace(self._config, grouping=grouping))

	def _commit(self, cfg: ArchiveConfig) -> ArchiveConfig:
		self.storage.save(cfg.to_dict())
		self._config = cfg
		return cfg
