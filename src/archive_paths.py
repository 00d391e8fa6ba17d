from datetime import datetime
from typing import Dict

from config import ArchiveConfig, GROUP_BY_YEAR, NO_GROUPING
from util import join_path, normalize_path


def _date_segments(now: datetime) -> Dict[str, str]:
	"""Return the folder names used for date grouping."""
	return {
		"year": now.strftime("%Y"),
		# e.g. 05-May; month name follows the process locale
		"month": f"{now.strftime('%m')}-{now.strftime('%B')}",
	}


def archive_subfolder(archive_folder_name: str, grouping: str, now: datetime) -> str:
	"""
	Return the folder archived files are bucketed into.

	NoGrouping  -> Archive
	Year        -> Archive/2024
	Month       -> Archive/2024/05-May
	"""
	if grouping == NO_GROUPING:
		return normalize_path(archive_folder_name)

	seg = _date_segments(now)
	if grouping == GROUP_BY_YEAR:
		return join_path(archive_folder_name, seg["year"])
	# Month; groupings are validated when settings are accepted
	return join_path(archive_folder_name, seg["year"], seg["month"])


def resolve_destination(
	archive_folder_name: str,
	grouping: str,
	source_path: str,
	now: datetime,
) -> str:
	"""
	Map a source file to its archived location.

	The full source path is nested under the archive subfolder, so
	"Projects/todo.md" lands in "Archive/Projects/todo.md" rather than
	being flattened into the archive root.
	"""
	return join_path(archive_subfolder(archive_folder_name, grouping, now), source_path)


def resolve_for_config(config: ArchiveConfig, source_path: str, now: datetime) -> str:
	"""Convenience wrapper taking a settings snapshot."""
	return resolve_destination(config.archive_folder_name, config.grouping, source_path, now)
