from pathlib import Path
import shutil
from typing import Optional
import unicodedata

from interfaces import FILE, FOLDER, VaultFile
from util import VAULT_ROOT, normalize_path


def _find_entry(folder: Path, name: str) -> Optional[Path]:
	"""Find a directory entry whose name equals `name` once both are NFC."""
	if not folder.is_dir():
		return None
	for entry in folder.iterdir():
		if unicodedata.normalize("NFC", entry.name) == name:
			return entry
	return None


class LocalVault:
	def __init__(self, root: Path):
		"""File tree backed by a directory on disk."""
		self.root = Path(root).expanduser().resolve(strict=False)

	def _abs(self, path: str) -> Path:
		"""
		Resolve a vault-relative path to an absolute one.

		Vault paths are NFC; names stored decomposed on disk (as synced
		from macOS) are matched entry by entry. Rejects paths that escape
		the vault through symlinks.
		"""
		rel = normalize_path(path)
		if rel == VAULT_ROOT:
			return self.root

		current = self.root
		for segment in rel.split("/"):
			candidate = current / segment
			if not candidate.exists() and not candidate.is_symlink():
				candidate = _find_entry(current, segment) or candidate
			current = candidate

		target = current.resolve(strict=False)
		if target != self.root and self.root not in target.parents:
			raise ValueError(f"{path} is outside vault {self.root}")
		return target

	def kind(self, path: str) -> Optional[str]:
		p = self._abs(path)
		if p.is_dir():
			return FOLDER
		if p.exists():
			return FILE
		return None

	def create_folder(self, path: str):
		# single level; parents=False so a missing parent is the caller's bug
		self._abs(path).mkdir(parents=False, exist_ok=False)

	def get_file(self, path: str) -> Optional[VaultFile]:
		if self._abs(path).is_file():
			return VaultFile(normalize_path(path))
		return None

	def copy(self, file: VaultFile, destination: str) -> VaultFile:
		"""Copy content and metadata; never overwrites, never leaves a partial copy."""
		src = self._abs(file.path)
		dest = self._abs(destination)
		with src.open("rb") as fin:
			# "x" fails if something appeared at dest since the caller checked
			fout = dest.open("xb")
			try:
				with fout:
					shutil.copyfileobj(fin, fout)
				shutil.copystat(src, dest)
			except Exception:
				dest.unlink(missing_ok=True)
				raise
		return VaultFile(normalize_path(destination))

	def delete(self, file: VaultFile):
		self._abs(file.path).unlink()
