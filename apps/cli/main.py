"""CLI application for DepPrep."""

import difflib
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from core.config import get_settings
from core.detect import GEMFILE, LOCKFILE, RUBY_VERSION_FILE, classify
from core.errors import DepPrepError
from core.file_preparer import FilePreparer
from core.log import configure_logging, get_logger
from core.models import Dependency, ManifestFile

console = Console(soft_wrap=True)
logger = get_logger("depprep.cli")


def load_dependency_files(directory: Path, extra_files: list[str] | None = None) -> list[ManifestFile]:
    """Read the Bundler files of a project directory.

    Picks up Gemfile, Gemfile.lock, .ruby-version and top-level gemspecs, plus
    any extra paths (evaled Gemfiles, path gemspecs) relative to ``directory``.
    """
    names = [GEMFILE, LOCKFILE, RUBY_VERSION_FILE]
    names.extend(sorted(p.name for p in directory.glob("*.gemspec")))
    names.extend(extra_files or [])

    files = []
    for name in dict.fromkeys(names):
        path = directory / name
        if path.is_file():
            files.append(ManifestFile(name=name, content=path.read_text(), directory="/"))
        elif name in (extra_files or []):
            raise FileNotFoundError(f"File {path} not found")
    return files


def format_diff_output(original: list[ManifestFile], prepared: list[ManifestFile]) -> str:
    """Format unified diffs for every file whose content changed."""
    originals = {f.name: f.content for f in original}
    chunks = []

    for file in prepared:
        before = originals.get(file.name, "")
        if before == file.content:
            continue
        chunks.append("".join(difflib.unified_diff(
            before.splitlines(keepends=True),
            file.content.splitlines(keepends=True),
            fromfile=f"a/{file.name}",
            tofile=f"b/{file.name}",
        )))

    return "\n".join(chunks)


def format_json_output(original: list[ManifestFile], prepared: list[ManifestFile]) -> str:
    """Format JSON output."""
    originals = {f.name: f.content for f in original}
    files = [
        {
            "name": file.name,
            "directory": file.directory,
            "content": file.content,
            "changed": originals.get(file.name) != file.content,
        }
        for file in prepared
    ]
    return json.dumps({"files": files}, indent=2)


def has_changes(original: list[ManifestFile], prepared: list[ManifestFile]) -> bool:
    """Check if preparing changed any file."""
    originals = {f.name: f.content for f in original}
    return any(originals.get(f.name) != f.content for f in prepared)


def write_prepared_files(out_dir: Path, prepared: list[ManifestFile]) -> None:
    for file in prepared:
        target = out_dir / file.name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(file.content)


app = typer.Typer(
    name="depprep",
    help="DepPrep - Prepare Bundler dependency files for an update check",
    add_completion=False,
)


@app.command()
def prepare(
    directory: Path = typer.Argument(help="Project directory containing the Gemfile and/or gemspec"),
    dependency_name: str = typer.Argument(help="Name of the gem being update-checked"),
    version: str | None = typer.Option(None, "--version", "-v", help="Current version or git SHA"),
    remove_git_source: bool = typer.Option(False, "--remove-git-source", help="Strip git source options"),
    git_pin: str | None = typer.Option(None, "--git-pin", help="Replacement ref/tag for a git source"),
    extra_files: list[str] = typer.Option(
        [], "--file", "-f", help="Extra file relative to DIRECTORY (evaled Gemfile, path gemspec)"
    ),
    out_dir: Path | None = typer.Option(None, "--out", "-o", help="Write prepared files below this directory"),
    format_type: str = typer.Option("diff", "--format", help="Output format: diff or json"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Prepare dependency files, leaving the originals untouched."""
    settings = get_settings()
    configure_logging(log_level)

    try:
        if not directory.is_dir():
            console.print(f"Error: Directory {directory} not found", style="red", markup=False)
            raise typer.Exit(1)

        files = load_dependency_files(directory, extra_files)
        if not files:
            console.print("No dependency files found")
            raise typer.Exit(1)

        preparer = FilePreparer(
            files,
            Dependency(name=dependency_name, version=version),
            remove_git_source=remove_git_source,
            replacement_git_pin=git_pin,
            grammar=settings.grammar,
            placeholder_version=settings.placeholder_version,
        )
        prepared = preparer.prepared_dependency_files()

        if out_dir:
            write_prepared_files(out_dir, prepared)
            console.print(f"Wrote {len(prepared)} prepared file(s) to {out_dir}")
        elif format_type == "json":
            console.print_json(format_json_output(files, prepared))
        elif not has_changes(files, prepared):
            console.print("No changes needed")
            raise typer.Exit(2)  # No changes exit code
        else:
            console.print(
                format_diff_output(files, prepared),
                markup=False,
                highlight=False,
            )

    except typer.Exit:
        raise
    except (DepPrepError, OSError) as e:
        logger.debug("Preparing %s failed", dependency_name, exc_info=True)
        console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(1)


@app.command()
def roles(
    directory: Path = typer.Argument(help="Project directory"),
    extra_files: list[str] = typer.Option([], "--file", "-f", help="Extra file relative to DIRECTORY"),
) -> None:
    """Show the role each dependency file plays."""
    try:
        files = load_dependency_files(directory, extra_files)
    except OSError as e:
        console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(1)

    table = Table(title="Dependency files")
    table.add_column("File")
    table.add_column("Role")
    for file, role in classify(files).roles():
        table.add_row(file.name, role.value)
    console.print(table)


if __name__ == "__main__":
    app()
