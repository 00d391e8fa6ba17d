from datetime import datetime

import pytest

from archive_paths import archive_subfolder, resolve_destination, resolve_for_config
from config import ArchiveConfig


MAY_15 = datetime(2024, 5, 15, 10, 30)


def test_no_grouping_nests_full_source_path():
	assert resolve_destination("Archive", "NoGrouping", "Notes/todo.md", MAY_15) == "Archive/Notes/todo.md"


def test_no_grouping_ignores_date():
	assert resolve_destination("Archive", "NoGrouping", "todo.md", datetime(1999, 1, 1)) == "Archive/todo.md"


def test_year_grouping():
	assert resolve_destination("Archive", "Year", "todo.md", MAY_15) == "Archive/2024/todo.md"


def test_month_grouping_pads_month_and_appends_name():
	assert resolve_destination("Archive", "Month", "todo.md", MAY_15) == "Archive/2024/05-May/todo.md"


def test_month_grouping_keeps_source_folders():
	now = datetime(2023, 11, 2)
	dest = resolve_destination("Old/Stuff", "Month", "Projects/q4/plan.md", now)
	assert dest == "Old/Stuff/2023/11-November/Projects/q4/plan.md"


def test_resolution_is_deterministic():
	first = resolve_destination("Archive", "Month", "Notes/todo.md", MAY_15)
	second = resolve_destination("Archive", "Month", "Notes/todo.md", MAY_15)
	assert first == second


@pytest.mark.parametrize(
	"folder, source",
	[
		("Archive/", "Notes/todo.md"),
		("./Archive", "Notes//todo.md"),
		("Archive", "./Notes/./todo.md"),
		("/Archive//", "/Notes/todo.md"),
	],
)
def test_resolution_ignores_redundant_separators(folder, source):
	assert resolve_destination(folder, "Year", source, MAY_15) == "Archive/2024/Notes/todo.md"


def test_archive_subfolder_for_each_grouping():
	assert archive_subfolder("Archive", "NoGrouping", MAY_15) == "Archive"
	assert archive_subfolder("Archive", "Year", MAY_15) == "Archive/2024"
	assert archive_subfolder("Archive", "Month", MAY_15) == "Archive/2024/05-May"


def test_resolve_for_config_uses_snapshot_fields():
	cfg = ArchiveConfig(archive_folder_name="Attic", grouping="Year")
	assert resolve_for_config(cfg, "a/b.md", MAY_15) == "Attic/2024/a/b.md"
