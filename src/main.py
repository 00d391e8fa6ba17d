#!/usr/bin/env python3
import argparse
from pathlib import Path
import sys
import traceback

from humanfriendly import InvalidDate

from archiver import Archiver, can_archive, folder_status, FOLDER_IS_FILE
from config import (
	ARCHIVE_FOLDER_GROUPINGS,
	DEFAULT_CONFIG_FILENAME,
	GROUPING_LABELS,
	SettingsStore,
	YamlSettingsStorage,
)
from errors import ArchiveError, InvalidConfigurationError
from util import normalize_path, parse_timestamp
from vault import LocalVault


class ConsoleNotifier:
	def notice(self, message: str, error: bool = False):
		"""Print user-facing notices with the same tags as the rest of the CLI."""
		tag = "[ERROR]" if error else "[OK]"
		print(f"{tag} {message}")


def parse_args(argv=None):
	"""
	Build and parse the CLI.

	Returns:
		argparse.Namespace with the vault/config locations, the selected
		command and its arguments.
	"""
	p = argparse.ArgumentParser(
		description="Move notes into the archive folder of a vault"
	)

	p.add_argument(
		"--vault",
		default=".",
		help="Vault root directory (default: current directory)",
	)

	p.add_argument(
		"--config",
		default=None,
		help=f"Path to settings file (default: <vault>/{DEFAULT_CONFIG_FILENAME})",
	)

	sub = p.add_subparsers(dest="command", required=True)

	arc = sub.add_parser("archive", help="Archive a single note")
	arc.add_argument(
		"path",
		help="Vault-relative path of the note, e.g. Projects/todo.md",
	)
	arc.add_argument(
		"--date",
		default=None,
		help="Archive as if today were DATE, e.g. '2024-05-15'",
	)

	st = sub.add_parser("settings", help="Show or change settings")
	st_sub = st.add_subparsers(dest="settings_command", required=True)
	st_sub.add_parser("show", help="Print the current settings")
	folder = st_sub.add_parser("folder", help="Set the archive folder")
	folder.add_argument("name")
	grouping = st_sub.add_parser("grouping", help="Set how archived notes are grouped")
	# validated by SettingsStore so rejections surface as configuration errors
	grouping.add_argument("value", metavar="{" + ",".join(ARCHIVE_FOLDER_GROUPINGS) + "}")

	sub.add_parser("check-folder", help="Report whether the archive folder is usable")

	return p.parse_args(argv)


def _print_folder_status(vault: LocalVault, folder: str) -> int:
	status, message = folder_status(vault, folder)
	tag = "[WARN]" if status == FOLDER_IS_FILE else "[INFO]"
	print(f"{tag} {folder}: {message}")
	return 1 if status == FOLDER_IS_FILE else 0


def run_archive(
	args: argparse.Namespace,
	vault: LocalVault,
	store: SettingsStore,
	config_path: Path,
) -> int:
	"""Archive the requested note; ArchiveError is already reported by the notifier."""
	config = store.snapshot()
	path = normalize_path(args.path)

	if (vault.root / path).resolve(strict=False) == config_path.resolve(strict=False):
		print(f"[WARN] {path} is the settings file and cannot be archived")
		return 1

	if not can_archive(path, config):
		print(f"[WARN] {path} is already inside archive folder {config.archive_folder_name}")
		return 1

	now = None
	if args.date is not None:
		try:
			now = parse_timestamp(args.date)
		except (InvalidDate, ValueError) as e:
			print(f"[ERROR] Invalid --date value {args.date!r}: {e}")
			return 1

	archiver = Archiver(vault, store, ConsoleNotifier())
	try:
		archiver.archive(args.path, now=now)
	except ArchiveError:
		return 1
	return 0


def run_settings(args: argparse.Namespace, vault: LocalVault, store: SettingsStore) -> int:
	"""Show or update a single setting, persisting it on success."""
	if args.settings_command == "folder":
		cfg = store.set_archive_folder_name(args.name)
		print(f"[OK] Archive folder set to {cfg.archive_folder_name}")
		return _print_folder_status(vault, cfg.archive_folder_name)

	if args.settings_command == "grouping":
		cfg = store.set_grouping(args.value)
		print(f"[OK] Grouping set to {cfg.grouping} ({GROUPING_LABELS[cfg.grouping]})")
		return 0

	cfg = store.snapshot()
	print(f"version: {cfg.version}")
	print(f"archive_folder_name: {cfg.archive_folder_name}")
	print(f"grouping: {cfg.grouping} ({GROUPING_LABELS[cfg.grouping]})")
	return 0


def main(argv=None) -> int:
	"""
	Orchestrate settings loading, vault setup and command dispatch.
	Returns the process exit status.
	"""
	args = parse_args(argv)

	vault = LocalVault(Path(args.vault))
	config_path = Path(args.config) if args.config else vault.root / DEFAULT_CONFIG_FILENAME

	# load settings
	try:
		store = SettingsStore(YamlSettingsStorage(config_path))
		if config_path.exists():
			print(f"[OK] Loaded settings from {config_path}")
	except InvalidConfigurationError as e:
		print(f"[ERROR] Invalid settings in {config_path}: {e}")
		return 1
	except Exception as e:
		print(f"[ERROR] Failed to load settings: {e}")
		traceback.print_exc()
		return 1

	try:
		if args.command == "archive":
			return run_archive(args, vault, store, config_path)
		if args.command == "settings":
			return run_settings(args, vault, store)
		return _print_folder_status(vault, store.snapshot().archive_folder_name)
	except InvalidConfigurationError as e:
		print(f"[ERROR] {e}")
		return 1
	except KeyboardInterrupt:
		print("\n[WARN] Interrupted by user")
		return 1
	except Exception as e:
		print(f"[ERROR] Fatal: {e}")
		traceback.print_exc()
		return 1


if __name__ == "__main__":
	sys.exit(main())
