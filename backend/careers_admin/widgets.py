"""
State and geometry of the console's interactive widgets, without rendering:
the scrollable table's gradients and indicator, the keyboard-driven select
and the actions popover menu.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

EDGE_TOLERANCE_PX = 5


@dataclass
class ScrollState:
    """Horizontal scroll position of a table container, in pixels."""
    scroll_width: float
    client_width: float
    scroll_left: float = 0

    @property
    def overflows(self) -> bool:
        return self.scroll_width > self.client_width

    @property
    def show_left_gradient(self) -> bool:
        return self.overflows and self.scroll_left > EDGE_TOLERANCE_PX

    @property
    def show_right_gradient(self) -> bool:
        distance_to_right = abs(self.scroll_width - self.scroll_left - self.client_width)
        return self.overflows and distance_to_right > EDGE_TOLERANCE_PX

    def indicator(self) -> Optional[dict]:
        """Width and left offset of the scroll indicator in percent, None when hidden."""
        if not self.overflows:
            return None
        width = self.client_width / self.scroll_width * 100
        max_scroll = self.scroll_width - self.client_width
        left = self.scroll_left / max_scroll * (100 - width)
        return {"width": width, "left": left}

    def scroll_to(self, scroll_left: float) -> None:
        self.scroll_left = scroll_left


@dataclass
class Option:
    value: Any
    label: str


class ListboxState:
    """
    Custom select: opens on the selected option, arrows wrap around,
    Enter or Space picks, Escape closes.
    """

    def __init__(self, options: Sequence[Option], value: Any = None, on_change: Optional[Callable[[Any], None]] = None):
        self.options: List[Option] = list(options)
        self.value = value
        self.on_change = on_change
        self.is_open = False
        self.active_index = -1

    @property
    def selected_index(self) -> int:
        for index, option in enumerate(self.options):
            if option.value == self.value:
                return index
        return -1

    @property
    def selected_label(self) -> Optional[str]:
        index = self.selected_index
        return self.options[index].label if index >= 0 else None

    def open(self) -> None:
        self.is_open = True
        self.active_index = max(self.selected_index, 0)

    def close(self) -> None:
        self.is_open = False

    def toggle(self) -> None:
        if self.is_open:
            self.close()
        else:
            self.open()

    def select(self, index: int) -> None:
        if 0 <= index < len(self.options):
            self.value = self.options[index].value
            if self.on_change:
                self.on_change(self.value)
            self.close()

    def handle_key(self, key: str) -> bool:
        """Apply a key press while open. Returns True when the key was handled."""
        if not self.is_open or not self.options:
            return False
        count = len(self.options)
        if key == "Escape":
            self.close()
        elif key == "ArrowDown":
            self.active_index = self.active_index + 1 if self.active_index < count - 1 else 0
        elif key == "ArrowUp":
            self.active_index = self.active_index - 1 if self.active_index > 0 else count - 1
        elif key in ("Enter", " "):
            self.select(self.active_index)
        else:
            return False
        return True

    def click_outside(self) -> None:
        self.close()


@dataclass
class MenuItem:
    label: str
    on_click: Optional[Callable[[], Any]] = None
    variant: str = "default"  # default | danger | success
    disabled: bool = False


@dataclass
class PopoverMenu:
    """Row actions menu: toggled by its button, closed by outside clicks and after any action."""
    items: List[MenuItem] = field(default_factory=list)
    is_open: bool = False

    def toggle(self) -> None:
        self.is_open = not self.is_open

    def close(self) -> None:
        self.is_open = False

    def click_outside(self) -> None:
        self.close()

    def handle_key(self, key: str) -> None:
        if key == "Escape":
            self.close()

    def activate(self, index: int) -> Any:
        item = self.items[index]
        if item.disabled:
            return None
        self.close()
        return item.on_click() if item.on_click else None
