"""Decoration of tree lines: colors, icons, type labels and IDs."""

from dataclasses import dataclass
from typing import NamedTuple

from .core.item import DocSubtype, Item


COLORS = {
    'folder': "\033[36m",
    DocSubtype.PDF: "\033[31m",
    DocSubtype.EPUB: "\033[32m",
    'reset': "\033[0m",
}

ICONS = {
    'folder': "📁 ",
    DocSubtype.PDF: "📕 ",
    DocSubtype.EPUB: "📗 ",
    DocSubtype.NOTEBOOK: "📓 ",
}

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PREFIX = "│   "
SPACE_PREFIX = "    "

TRASH_LABEL = "Trash"


@dataclass
class FormatConfig:
    """Which decorations to draw on each line."""

    use_color: bool = True
    show_icons: bool = False
    show_labels: bool = False
    show_ids: bool = False

    @classmethod
    def plain(cls) -> 'FormatConfig':
        """No color codes and no decorations."""
        return cls(use_color=False)


class Decorations(NamedTuple):
    color: str
    icon: str
    reset: str
    type_label: str
    id_suffix: str


def item_decorations(item: Item, fmt: FormatConfig) -> Decorations:
    """Work out the decorations for one item under ``fmt``."""
    # Item lines always end the name with a reset, colored or not
    reset = COLORS['reset']
    color = ""
    if fmt.use_color:
        if item.is_folder:
            color = COLORS['folder']
        else:
            color = COLORS.get(item.doc_subtype, "")

    icon = ""
    if fmt.show_icons:
        if item.is_folder:
            icon = ICONS['folder']
        else:
            icon = ICONS.get(item.doc_subtype, ICONS[DocSubtype.NOTEBOOK])

    type_label = ""
    if fmt.show_labels and not item.is_folder:
        subtype = item.doc_subtype or DocSubtype.NOTEBOOK
        type_label = f" ({subtype.value})"

    id_suffix = ""
    if fmt.show_ids and not item.is_folder:
        id_suffix = f" [{item.id}]"

    return Decorations(color, icon, reset, type_label, id_suffix)


def format_line(item: Item, prefix: str, is_last: bool, fmt: FormatConfig) -> str:
    """Render one tree line, without the trailing newline."""
    connector = LAST_BRANCH if is_last else BRANCH
    deco = item_decorations(item, fmt)
    return (f"{prefix}{connector}{deco.color}{deco.icon}{item.name}{deco.reset}"
            f"{deco.type_label}{deco.id_suffix}")


def format_trash_line(fmt: FormatConfig) -> str:
    """The synthetic trash folder entry, always drawn as the last root."""
    color = COLORS['folder'] if fmt.use_color else ""
    reset = COLORS['reset'] if fmt.use_color else ""
    icon = ICONS['folder'] if fmt.show_icons else ""
    return f"{LAST_BRANCH}{color}{icon}{TRASH_LABEL}{reset}"


def branch_prefix(ancestors_last) -> str:
    """Continuation bars for ancestors that are not last, blanks otherwise."""
    return "".join(SPACE_PREFIX if last else PIPE_PREFIX for last in ancestors_last)


def format_summary(dir_count: int, file_count: int) -> str:
    """The trailing "<N> directories, <M> files" line."""
    dir_text = "directory" if dir_count == 1 else "directories"
    file_text = "file" if file_count == 1 else "files"
    return f"{dir_count} {dir_text}, {file_count} {file_text}"
