"""Tree plumbing - snapshot the working tree and list tree objects."""

import click
from shale.core.repository import Repository
from shale.core.tree import TreeBuilder
from shale.core.codec import ObjectKind
from shale.core.errors import NotFound, ShaleError, WrongObjectKind
from shale.cli.output import error


@click.command('ls-tree')
@click.option('--name-only', is_flag=True, help='Show only entry names')
@click.argument('tree_hash')
def ls_tree_cmd(name_only, tree_hash):
    """
    List contents of a tree object.
    
    Each line shows mode, kind, hash and name, or only the name with
    --name-only. Entries come out in the order stored in the tree.
    
    Examples:
        shale ls-tree 4b825dc              # Full listing
        shale ls-tree --name-only 4b825dc  # Only entry names
    """
    try:
        repo = Repository.find_repository()
        if not repo:
            click.echo(error("Not a shale repository"), err=True)
            raise click.Abort()
        
        full_hash = repo.resolve_object(tree_hash)
        if not full_hash:
            raise NotFound(tree_hash)
        
        tree_obj = repo.read_object(full_hash)
        if tree_obj.kind is not ObjectKind.TREE:
            raise WrongObjectKind(full_hash, 'tree', tree_obj.type)
        
        for entry in tree_obj.entries:
            if name_only:
                click.echo(entry.name)
            else:
                click.echo(f"{entry.mode.zfill(6)} {entry.type} {entry.hash}\t{entry.name}")
    except ShaleError as e:
        click.echo(error(f"ls-tree failed: {e}"), err=True)
        raise click.Abort()


@click.command('write-tree')
def write_tree_cmd():
    """
    Snapshot the working tree into the object store.
    
    Every file becomes a blob and every directory a tree; all of them are
    written, and the hash of the root tree is printed. The metadata
    directory is never included.
    
    Examples:
        shale write-tree
    """
    try:
        repo = Repository.find_repository()
        if not repo:
            click.echo(error("Not a shale repository"), err=True)
            raise click.Abort()
        
        tree = TreeBuilder(repo, write=True).build()
    except ShaleError as e:
        click.echo(error(f"write-tree failed: {e}"), err=True)
        raise click.Abort()
    
    click.echo(tree.hash)
