from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol


# entry kinds reported by FileTree.kind()
FILE = "file"
FOLDER = "folder"


@dataclass(frozen=True)
class VaultFile:
	"""Handle to a plain file in the vault."""

	path: str                           # vault-relative, normalized


class FileTree(Protocol):
	def kind(self, path: str) -> Optional[str]:
		"""Return FILE, FOLDER, or None when nothing exists at the path."""
		...

	def create_folder(self, path: str) -> None:
		"""
		Create a single folder whose parent already exists.
		Raises FileExistsError if anything already occupies the path.
		"""
		...

	def get_file(self, path: str) -> Optional[VaultFile]:
		"""Return a handle when a plain file exists at the path."""
		...

	def copy(self, file: VaultFile, destination: str) -> VaultFile:
		"""
		Copy content and metadata to destination.
		Raises FileExistsError instead of overwriting.
		"""
		...

	def delete(self, file: VaultFile) -> None:
		"""Remove the file from the vault."""
		...


class SettingsStorage(Protocol):
	def load(self) -> Optional[Dict[str, Any]]:
		"""Return the persisted settings mapping, or None if nothing is stored."""
		...

	def save(self, data: Dict[str, Any]) -> None:
		"""Persist the settings mapping, replacing what was stored."""
		...


class Notifier(Protocol):
	def notice(self, message: str, error: bool = False) -> None:
		"""Show a message to the user; `error` marks a failure report."""
		...
