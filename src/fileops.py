from dataclasses import dataclass, field
from typing import List

from errors import (
	CopyFailedError,
	DestinationAlreadyExistsError,
	DestinationPathConflictError,
	PartialMoveError,
	SourceNotFoundError,
)
from interfaces import FILE, FOLDER, FileTree
from util import escapes_vault, folder_chain, normalize_path, parent_of


@dataclass
class ArchiveResult:
	source: str
	destination: str
	created_folders: List[str] = field(default_factory=list)

	@property
	def message(self) -> str:
		return f"{self.source} moved to {self.destination}"


def _check_folder_chain(tree: FileTree, folder: str):
	"""Fail early if any segment of the chain is occupied by a file."""
	for segment in folder_chain(folder):
		found = tree.kind(segment)
		if found == FILE:
			raise DestinationPathConflictError(segment)
		if found is None:
			# everything below a missing folder is missing too
			return


def ensure_folder(tree: FileTree, folder: str) -> List[str]:
	"""
	Create `folder` and every missing ancestor, top-down ("mkdir -p").

	A folder that already exists, including one created by a concurrent
	run between our check and our create, counts as success.
	Returns the folders this call actually created.
	"""
	created: List[str] = []
	for segment in folder_chain(folder):
		found = tree.kind(segment)
		if found == FOLDER:
			continue
		if found == FILE:
			raise DestinationPathConflictError(segment)

		print(f"[INFO] Creating folder {segment}")
		try:
			tree.create_folder(segment)
		except FileExistsError:
			if tree.kind(segment) != FOLDER:
				raise DestinationPathConflictError(segment)
			print(f"[INFO] Folder {segment} already exists")
			continue
		created.append(segment)
	return created


def move_to_archive(tree: FileTree, source_path: str, destination: str) -> ArchiveResult:
	"""
	Move a single file to its resolved archive destination.

	Copies first and deletes the source only once the copy is complete.
	All preconditions (source present, no file blocking the folder chain,
	nothing at the destination) are checked before anything is written.
	"""
	if escapes_vault(source_path):
		raise SourceNotFoundError(source_path)

	source_path = normalize_path(source_path)
	destination = normalize_path(destination)
	folder = parent_of(destination)

	source = tree.get_file(source_path)
	if source is None:
		raise SourceNotFoundError(source_path)

	_check_folder_chain(tree, folder)
	# an occupied destination is always reported as a copy-stage failure,
	# whether found here or when the copy itself refuses to overwrite
	if tree.kind(destination) is not None:
		raise DestinationAlreadyExistsError(destination)

	created = ensure_folder(tree, folder)

	try:
		tree.copy(source, destination)
	except FileExistsError as e:
		raise DestinationAlreadyExistsError(destination) from e
	except OSError as e:
		raise CopyFailedError(source_path, destination, str(e)) from e

	try:
		tree.delete(source)
	except OSError as e:
		raise PartialMoveError(source_path, destination) from e

	return ArchiveResult(source=source_path, destination=destination, created_folders=created)
