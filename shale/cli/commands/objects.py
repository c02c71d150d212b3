"""Object plumbing - hash files into blobs and inspect stored objects."""

import click
from shale.core.repository import Repository
from shale.core.objects import Blob, Tree, Commit
from shale.core.errors import NotFound, ShaleError
from shale.cli.output import error


@click.command('hash-object')
@click.option('-w', '--write', is_flag=True, help='Write the blob into the object store')
@click.argument('file', type=click.Path())
def hash_object_cmd(write, file):
    """
    Compute the blob hash of a file.
    
    Prints the 40-character hash. With -w the blob is also stored.
    
    Examples:
        shale hash-object README.md       # Print the hash only
        shale hash-object -w README.md    # Store the blob too
    """
    try:
        blob = Blob.from_file(file)
        
        if write:
            repo = Repository.find_repository()
            if not repo:
                click.echo(error("Not a shale repository"), err=True)
                raise click.Abort()
            repo.write_object(blob)
        
        click.echo(blob.hash)
    except ShaleError as e:
        click.echo(error(f"hash-object failed: {e}"), err=True)
        raise click.Abort()


@click.command('cat-file')
@click.option('-t', '--type', 'show_type', is_flag=True, help='Show object type')
@click.option('-s', '--size', 'show_size', is_flag=True, help='Show object size')
@click.option('-p', '--pretty', is_flag=True, help='Pretty-print object content')
@click.argument('object_hash')
def cat_file_cmd(show_type, show_size, pretty, object_hash):
    """
    Show object content, type, or size.
    
    With -p a blob is printed verbatim, a tree as one entry name per line
    and a commit as its text.
    
    Examples:
        shale cat-file -t 557db03     # Show object type
        shale cat-file -s 557db03     # Show object size
        shale cat-file -p 557db03     # Pretty-print object content
    """
    if not (show_type or show_size or pretty):
        click.echo(error("One of -t, -s or -p is required"), err=True)
        raise click.Abort()
    
    try:
        repo = Repository.find_repository()
        if not repo:
            click.echo(error("Not a shale repository"), err=True)
            raise click.Abort()
        
        full_hash = repo.resolve_object(object_hash)
        if not full_hash:
            raise NotFound(object_hash)
        
        obj = repo.read_object(full_hash)
        
        if show_type:
            click.echo(obj.type)
        elif show_size:
            click.echo(obj.size)
        elif isinstance(obj, Blob):
            click.echo(obj.data, nl=False)
        elif isinstance(obj, Tree):
            for name in obj.names():
                click.echo(name)
        elif isinstance(obj, Commit):
            click.echo(obj.serialize(), nl=False)
    except ShaleError as e:
        click.echo(error(f"cat-file failed: {e}"), err=True)
        raise click.Abort()
