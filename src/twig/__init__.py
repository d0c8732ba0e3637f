"""Git branch workflow tool.

Features:
- Sync the current branch with its upstream (fetch, prune and rebase pull)
- Switch local branches interactively
- Delete a local branch interactively, with confirmation
- Uncommitted changes are stashed before and restored after each step
"""

__version__ = "0.1.0"
