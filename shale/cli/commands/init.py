"""Initialize a new Shale repository."""

import click
from pathlib import Path
from shale.core.repository import Repository
from shale.core.errors import ShaleError
from shale.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
@click.option('-b', '--initial-branch', default=None, help='Name for the default branch')
def init_cmd(path, initial_branch):
    """
    Initialize a new Shale repository.
    
    Creates the metadata directory with an object database, refs and a
    HEAD file pointing at the default branch.
    
    Examples:
        shale init                    # Initialize in current directory
        shale init my-project         # Initialize in my-project directory
        shale init -b trunk           # Use 'trunk' as the default branch
    """
    try:
        repo = Repository(Path(path))
        repo.init(default_branch=initial_branch)
    except ShaleError as e:
        click.echo(error(f"Failed to initialize repository: {e}"), err=True)
        raise click.Abort()
    
    click.echo(success(f"Initialized empty Shale repository in {repo.meta_dir}"))
    click.echo(info("Snapshot the working tree with: shale write-tree"))
