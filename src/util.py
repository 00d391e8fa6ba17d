from datetime import datetime
import posixpath
import re
import unicodedata

from humanfriendly import parse_date


VAULT_ROOT = "/"

_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:(?=/|$)")
_SPACE_LOOKALIKES = re.compile("[\u00a0\u202f]")


def normalize_path(value: str) -> str:
	"""
	Normalize a vault-relative path.

	- backslashes become forward slashes, drive letters are dropped
	- non-breaking spaces become plain spaces
	- redundant separators collapse, "." and ".." segments resolve
	  (".." never climbs above the vault root)
	- no leading or trailing slash; the root itself is "/"
	"""
	text = unicodedata.normalize("NFC", value)
	text = _SPACE_LOOKALIKES.sub(" ", text.replace("\\", "/"))
	text = _DRIVE_PREFIX.sub("", text)
	text = posixpath.normpath("/" + text).strip("/")
	return text or VAULT_ROOT


def escapes_vault(value: str) -> bool:
	"""
	True when a raw path names something outside the vault: a drive
	prefix, or ".." segments climbing above the root. normalize_path
	would silently rewrite both into a different vault path.
	"""
	text = value.replace("\\", "/")
	if _DRIVE_PREFIX.match(text):
		return True
	depth = 0
	for segment in text.split("/"):
		if segment == "..":
			depth -= 1
			if depth < 0:
				return True
		elif segment and segment != ".":
			depth += 1
	return False


def join_path(*parts: str) -> str:
	"""Join vault path segments and normalize the result."""
	cleaned = [p for p in parts if p and p != VAULT_ROOT]
	return normalize_path("/".join(cleaned))


def parent_of(path: str) -> str:
	"""Return the folder containing `path`; top-level entries live in the root."""
	return posixpath.dirname(normalize_path(path)) or VAULT_ROOT


def folder_chain(folder: str) -> list[str]:
	"""
	List every folder from the top of the vault down to `folder`.

	folder_chain("Archive/2024/05-May")
		-> ["Archive", "Archive/2024", "Archive/2024/05-May"]
	"""
	folder = normalize_path(folder)
	if folder == VAULT_ROOT:
		return []
	segments = folder.split("/")
	return ["/".join(segments[:i]) for i in range(1, len(segments) + 1)]


def is_within(path: str, folder: str) -> bool:
	"""True when `path` is `folder` itself or lies somewhere beneath it."""
	path = normalize_path(path)
	folder = normalize_path(folder)
	if folder == VAULT_ROOT:
		return True
	return path == folder or path.startswith(folder + "/")


def parse_timestamp(value: str) -> datetime:
	"""
	Parse a human-entered date such as "2024-05-15" or "2024-05-15 13:30".
	Raises humanfriendly.InvalidDate for anything it cannot read.
	"""
	if not value or not value.strip():
		raise ValueError("timestamp is empty")
	return datetime(*parse_date(value.strip()))
