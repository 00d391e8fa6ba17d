"""
Error taxonomy for archive operations.

Every error records the stage of the archive run it failed in so the
caller can tell how far the operation got before stopping.
"""

# archive run stages
RESOLVING_PATH = "resolving_path"
ENSURING_FOLDER = "ensuring_folder"
COPYING = "copying"
DELETING = "deleting"


class ArchiveError(Exception):
	"""Base class for every failure surfaced to the user."""

	kind = "archive error"

	def __init__(self, message: str, stage: str | None = None):
		super().__init__(message)
		self.stage = stage


class InvalidConfigurationError(ArchiveError):
	kind = "invalid configuration"


class SourceNotFoundError(ArchiveError):
	kind = "source not found"

	def __init__(self, path: str, stage: str | None = RESOLVING_PATH):
		super().__init__(f"{path} does not exist or is not a file", stage)
		self.path = path


class DestinationPathConflictError(ArchiveError):
	kind = "destination path conflict"

	def __init__(self, path: str, stage: str | None = ENSURING_FOLDER):
		super().__init__(f"a file already exists where folder {path} is needed", stage)
		self.path = path


class DestinationAlreadyExistsError(ArchiveError):
	kind = "destination already exists"

	def __init__(self, path: str, stage: str | None = COPYING):
		super().__init__(f"{path} already exists, refusing to overwrite", stage)
		self.path = path


class PartialMoveError(ArchiveError):
	"""Copy succeeded but the source could not be deleted; both files exist."""

	kind = "partial move"

	def __init__(self, source: str, destination: str):
		super().__init__(
			f"{source} was copied to {destination} but could not be deleted; "
			"the file now exists in both places",
			DELETING,
		)
		self.source = source
		self.destination = destination


class CopyFailedError(ArchiveError):
	"""Copying failed before completing; the source is untouched."""

	kind = "copy failed"

	def __init__(self, source: str, destination: str, reason: str):
		super().__init__(f"could not copy {source} to {destination}: {reason}", COPYING)
		self.source = source
		self.destination = destination
