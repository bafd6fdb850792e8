"""Tests for repository-level metadata and documentation."""

from pathlib import Path


def test_readme_exists(project_root: Path) -> None:
    """Ensure that a README file exists at the project root."""
    readme = project_root / "README.md"
    assert readme.exists(), "README.md should exist at the project root"


def test_readme_documents_cli(project_root: Path) -> None:
    text = (project_root / "README.md").read_text(encoding="utf-8")
    assert "python -m shiftplan" in text
    for flag in ("--roster", "--slots", "--by-role"):
        assert flag in text


def test_example_roster_ships_with_sources(project_root: Path) -> None:
    assert (project_root / "src" / "example_roster.json").exists()
