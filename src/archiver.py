"""
Host-facing adapter around the archive core.

The host (here, the CLI) hands over a file path; the adapter snapshots
the settings, resolves the destination once, performs the move and emits
exactly one message through the notifier, whether the run succeeded or not.
"""

from datetime import datetime
from typing import Callable, Optional, Tuple

from archive_paths import resolve_for_config
from config import ArchiveConfig, SettingsStore
from errors import ArchiveError
from fileops import ArchiveResult, move_to_archive
from interfaces import FILE, FileTree, Notifier
from util import is_within, normalize_path


FOLDER_MISSING = "missing"
FOLDER_OK = "folder"
FOLDER_IS_FILE = "file"

_FOLDER_STATUS_MESSAGES = {
	FOLDER_MISSING: "Folder not in vault, it will be created when you archive a note here",
	FOLDER_OK: "Folder exists, all good",
	FOLDER_IS_FILE: "File exists with this name, you can't archive anything until you change this",
}


def can_archive(path: str, config: ArchiveConfig) -> bool:
	"""Files already inside the archive folder are not offered for archiving."""
	return not is_within(path, config.archive_folder_name)


def folder_status(tree: FileTree, folder: str) -> Tuple[str, str]:
	"""Describe whether the configured archive folder can be used."""
	found = tree.kind(normalize_path(folder))
	if found is None:
		status = FOLDER_MISSING
	elif found == FILE:
		status = FOLDER_IS_FILE
	else:
		status = FOLDER_OK
	return status, _FOLDER_STATUS_MESSAGES[status]


def format_error(err: ArchiveError) -> str:
	"""Render an error so it cannot be mistaken for a confirmation."""
	return f"Archive failed ({err.kind}): {err}"


class Archiver:
	def __init__(
		self,
		tree: FileTree,
		settings: SettingsStore,
		notifier: Notifier,
		clock: Callable[[], datetime] = datetime.now,
	):
		self.tree = tree
		self.settings = settings
		self.notifier = notifier
		self.clock = clock

	def archive(self, path: str, now: Optional[datetime] = None) -> ArchiveResult:
		"""
		Archive one file, reporting the outcome to the user.
		ArchiveError is re-raised after being reported.
		"""
		config = self.settings.snapshot()
		when = now or self.clock()

		try:
			destination = resolve_for_config(config, normalize_path(path), when)
			result = move_to_archive(self.tree, path, destination)
		except ArchiveError as e:
			self.notifier.notice(format_error(e), error=True)
			raise

		self.notifier.notice(result.message)
		return result
