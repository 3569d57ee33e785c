"""CLI interface for hashdog."""

import sys
import tempfile
from pathlib import Path

import click

from hashdog import __version__
from hashdog.archive import SevenZipArchiveService, SevenZipRunner
from hashdog.config import (
    DEFAULT_ARCHIVE_BIN,
    DEFAULT_MIN_FILESIZE,
    RunConfig,
    SinkConfig,
    SinkKind,
    split_skip_list,
)
from hashdog.errors import HashdogError
from hashdog.hashing import open_sinks
from hashdog.log import configure_logging
from hashdog.scanner import Reporter, TraversalEngine, root_for_input
from hashdog.workspace import Workspace


def build_archive_service(archive_bin: str) -> SevenZipArchiveService:
    return SevenZipArchiveService(SevenZipRunner(archive_bin))


@click.command(context_settings={"help_option_names": ["--help", "-h", "--man"]})
@click.option(
    "--input",
    "-i",
    "inputs",
    multiple=True,
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="File or directory to process (repeatable)",
)
@click.option(
    "--md5sum-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write md5 checksums",
)
@click.option("--md5sum-fullpath", is_flag=True, help="Use full file paths in the md5 file")
@click.option(
    "--sha1sum-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write sha-1 checksums",
)
@click.option("--sha1sum-fullpath", is_flag=True, help="Use full file paths in the sha-1 file")
@click.option(
    "--rds-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write checksums in RDS format",
)
@click.option("--rds-fullpath", is_flag=True, help="Use full file paths in the RDS file")
@click.option("--archive-bin", default=DEFAULT_ARCHIVE_BIN, show_default=True, help="7-Zip binary")
@click.option(
    "--archive-skip",
    multiple=True,
    help="Comma separated archive types to not expand",
)
@click.option(
    "--min-filesize",
    type=click.IntRange(min=0),
    default=DEFAULT_MIN_FILESIZE,
    show_default=True,
    help="Minimum file size in bytes to hash",
)
@click.option(
    "--tmp",
    "tmp_root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=tempfile.gettempdir(),
    help="Parent folder for the scratch directory",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--debug", "-d", is_flag=True, help="Debug output, including 7-Zip output")
def cli(
    inputs: tuple[Path, ...],
    md5sum_file: Path | None,
    md5sum_fullpath: bool,
    sha1sum_file: Path | None,
    sha1sum_fullpath: bool,
    rds_file: Path | None,
    rds_fullpath: bool,
    archive_bin: str,
    archive_skip: tuple[str, ...],
    min_filesize: int,
    tmp_root: Path,
    verbose: bool,
    debug: bool,
) -> None:
    """Hash every file below INPUT, descending into archives."""
    sinks: list[SinkConfig] = []
    if md5sum_file:
        sinks.append(SinkConfig(SinkKind.MD5SUM, md5sum_file, md5sum_fullpath))
    if sha1sum_file:
        sinks.append(SinkConfig(SinkKind.SHA1SUM, sha1sum_file, sha1sum_fullpath))
    if rds_file:
        sinks.append(SinkConfig(SinkKind.RDS, rds_file, rds_fullpath))

    config = RunConfig(
        inputs=list(inputs),
        sinks=sinks,
        archive_bin=archive_bin,
        archive_skip=split_skip_list(archive_skip),
        min_filesize=min_filesize,
        tmp_root=tmp_root,
        verbose=verbose,
        debug=debug,
    )
    configure_logging(verbose=verbose, debug=debug)

    try:
        run(config)
    except HashdogError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nInterrupted.", err=True)
        sys.exit(130)


def run(config: RunConfig) -> None:
    """Process every input of a run; raises HashdogError on fatal errors."""
    click.echo(f"[*] hashdog version: {__version__}")
    click.echo(f"[-] minimum filesize to process: {config.min_filesize} bytes")

    for input_path in config.inputs:
        root_for_input(input_path)

    archives = build_archive_service(config.archive_bin)
    click.echo(f"[-] archive binary: {archives.version}")

    reporter = Reporter()
    with Workspace(config.tmp_root) as workspace, open_sinks(config.sinks) as sinks:
        click.echo(f"[-] using tmp folder: {workspace.path}")
        engine = TraversalEngine(config, workspace, archives, sinks, reporter)
        for input_path in config.inputs:
            engine.run(input_path)
        click.echo("[-] deleting the tmp directory")
    reporter.report_completion(engine.stats)


def main() -> None:
    """Entry point for the CLI."""
    cli(standalone_mode=True)  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    main()
