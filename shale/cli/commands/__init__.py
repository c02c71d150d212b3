"""CLI commands for Shale."""

from shale.cli.commands.init import init_cmd
from shale.cli.commands.objects import hash_object_cmd, cat_file_cmd
from shale.cli.commands.tree import ls_tree_cmd, write_tree_cmd
from shale.cli.commands.commit import commit_tree_cmd

__all__ = ['init_cmd', 'hash_object_cmd', 'cat_file_cmd',
           'ls_tree_cmd', 'write_tree_cmd', 'commit_tree_cmd']
