from patterncat.renderer.markdown_renderer import (
    render_entry_skeleton,
    render_index,
    render_link,
)

__all__ = ["render_entry_skeleton", "render_index", "render_link"]
