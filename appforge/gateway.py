"""
Edit Gateway — the single path by which an editor pushes user edits.

Edits are full-content replacements of an existing file. A name the tree
does not hold (stale selection, renamed file) is a logged no-op; the
gateway never creates entries and never edits directory placeholders.
"""
from __future__ import annotations

import logging

from .project_tree import ProjectTree

logger = logging.getLogger("appforge.gateway")


class EditGateway:
    """
    Usage:
        gateway = EditGateway(tree)
        gateway.replace("src/App.tsx", new_source)
    """

    def __init__(self, tree: ProjectTree) -> None:
        self.tree = tree

    def replace(self, name: str, new_content: str) -> bool:
        """Returns True when the edit was applied."""
        if not self.tree.replace_content(name, new_content):
            logger.warning("Edit for unknown or non-file entry %r ignored", name)
            return False
        logger.debug("Edited %s (%d chars)", name, len(new_content))
        return True


def replace_content(tree: ProjectTree, name: str, new_content: str) -> ProjectTree:
    """Functional form of EditGateway.replace(); returns the same tree."""
    EditGateway(tree).replace(name, new_content)
    return tree
