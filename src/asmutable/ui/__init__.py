"""Terminal rendering of drafts using rich."""

from asmutable.ui.tree_renderer import print_pending, render_pending

__all__ = ["print_pending", "render_pending"]
