from __future__ import annotations

from typing import Callable, Dict, List, Optional

from interfaces import FILE, FOLDER, VaultFile
from util import VAULT_ROOT, normalize_path, parent_of


class MemoryVault:
	"""In-memory FileTree with hooks for injecting races and failures."""

	def __init__(self, files: Dict[str, str] | None = None, folders: List[str] | None = None):
		self.entries: Dict[str, Optional[str]] = {}  # path -> content (None for folders)
		self.created: List[str] = []
		self.calls: List[str] = []
		self.before_create: Callable[[str], None] | None = None
		self.fail_delete = False

		for folder in folders or []:
			self._add_folder_chain(folder)
		for path, content in (files or {}).items():
			self.add_file(path, content)

	def _add_folder_chain(self, folder: str):
		folder = normalize_path(folder)
		if folder == VAULT_ROOT:
			return
		self._add_folder_chain(parent_of(folder))
		self.entries.setdefault(folder, None)

	def add_file(self, path: str, content: str = ""):
		path = normalize_path(path)
		self._add_folder_chain(parent_of(path))
		self.entries[path] = content

	def content(self, path: str) -> Optional[str]:
		return self.entries.get(normalize_path(path))

	def kind(self, path: str) -> Optional[str]:
		path = normalize_path(path)
		if path == VAULT_ROOT:
			return FOLDER
		if path not in self.entries:
			return None
		return FOLDER if self.entries[path] is None else FILE

	def create_folder(self, path: str):
		path = normalize_path(path)
		self.calls.append(f"create_folder {path}")
		if self.before_create is not None:
			self.before_create(path)
		if self.kind(path) is not None:
			raise FileExistsError(path)
		if self.kind(parent_of(path)) != FOLDER:
			raise FileNotFoundError(parent_of(path))
		self.entries[path] = None
		self.created.append(path)

	def get_file(self, path: str) -> Optional[VaultFile]:
		if self.kind(path) == FILE:
			return VaultFile(normalize_path(path))
		return None

	def copy(self, file: VaultFile, destination: str) -> VaultFile:
		destination = normalize_path(destination)
		self.calls.append(f"copy {file.path} {destination}")
		if self.kind(destination) is not None:
			raise FileExistsError(destination)
		self.entries[destination] = self.entries[file.path]
		return VaultFile(destination)

	def delete(self, file: VaultFile):
		self.calls.append(f"delete {file.path}")
		if self.fail_delete:
			raise PermissionError(file.path)
		del self.entries[file.path]


class RecordingNotifier:
	def __init__(self):
		self.messages: List[tuple[str, bool]] = []

	def notice(self, message: str, error: bool = False):
		self.messages.append((message, error))


class MemorySettingsStorage:
	def __init__(self, data: dict | None = None):
		self.data = data
		self.saves = 0

	def load(self):
		return None if self.data is None else dict(self.data)

	def save(self, data: dict):
		self.saves += 1
		self.data = dict(data)
