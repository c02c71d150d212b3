"""Commit plumbing - record a tree as a commit."""

import click
from shale.core.repository import Repository
from shale.core.commit import build_commit
from shale.core.errors import NotFound, ShaleError
from shale.cli.output import error


def resolve_or_fail(repo, name):
    """Resolve a full or abbreviated object name, raising NotFound."""
    full_hash = repo.resolve_object(name)
    if not full_hash:
        raise NotFound(name)
    return full_hash


@click.command('commit-tree')
@click.option('-m', '--message', required=True, help='Commit message')
@click.option('-p', '--parent', default=None, help='Parent commit hash')
@click.argument('tree_hash')
def commit_tree_cmd(message, parent, tree_hash):
    """
    Create a commit object for a stored tree.
    
    The commit is written to the object store and its hash printed.
    Author and committer are fixed placeholders.
    
    Examples:
        shale commit-tree 4b825dc -m "Initial snapshot"
        shale commit-tree 4b825dc -p 05e1fd8 -m "Second snapshot"
    """
    try:
        repo = Repository.find_repository()
        if not repo:
            click.echo(error("Not a shale repository"), err=True)
            raise click.Abort()
        
        tree_hash = resolve_or_fail(repo, tree_hash)
        if parent is not None:
            parent = resolve_or_fail(repo, parent)
        
        commit = build_commit(repo, tree_hash, message, parent)
        commit_hash = repo.write_object(commit)
    except ShaleError as e:
        click.echo(error(f"commit-tree failed: {e}"), err=True)
        raise click.Abort()
    
    click.echo(commit_hash)
