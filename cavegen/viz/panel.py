import pygame
from typing import List, Sequence, Tuple


class ConfigPanel:
    """
    Keyboard driven, immediate-mode implementation of UISurface.

    Each frame the renderer calls begin(), hands the panel to the active
    generator's render_gui(), then draw(). Widgets are re-declared every
    frame; the selected widget consumes the pending edit.
    UP/DOWN selects a row, LEFT/RIGHT edits it, SHIFT uses the fast step.
    """

    COLOR_TEXT = (220, 220, 220)
    COLOR_SELECTED = (255, 215, 0)
    COLOR_BG = (25, 25, 35)

    def __init__(self):
        self.selected = 0
        self.rows: List[Tuple[str, str]] = []
        self.pending_delta = 0
        self.pending_fast = False
        self.edited = False

    def begin(self):
        self.rows = []
        self.edited = False

    def handle_key(self, event) -> bool:
        """Returns True if the key was consumed."""
        if event.key == pygame.K_UP:
            self.selected = max(0, self.selected - 1)
        elif event.key == pygame.K_DOWN:
            self.selected = min(max(len(self.rows) - 1, 0), self.selected + 1)
        elif event.key in (pygame.K_LEFT, pygame.K_RIGHT):
            self.pending_delta = 1 if event.key == pygame.K_RIGHT else -1
            self.pending_fast = bool(event.mod & pygame.KMOD_SHIFT)
        else:
            return False
        return True

    def _take_edit(self) -> Tuple[int, bool]:
        # Only the selected row sees the pending edit
        if len(self.rows) != self.selected or self.pending_delta == 0:
            return 0, False
        delta, fast = self.pending_delta, self.pending_fast
        self.pending_delta = 0
        self.edited = True
        return delta, fast

    # --- UISurface ---

    def input_float(self, label: str, value: float, step: float = 0.0,
                    step_fast: float = 0.0) -> Tuple[bool, float]:
        delta, fast = self._take_edit()
        if delta:
            increment = (step_fast if fast else step) or 0.01
            value = round(value + delta * increment, 4)
        self.rows.append((label, f"{value:.3f}"))
        return bool(delta), value

    def input_int(self, label: str, value: int, step: int = 1,
                  step_fast: int = 10) -> Tuple[bool, int]:
        delta, fast = self._take_edit()
        if delta:
            value += delta * (step_fast if fast else step)
        self.rows.append((label, str(value)))
        return bool(delta), value

    def checkbox(self, label: str, value: bool) -> Tuple[bool, bool]:
        delta, _ = self._take_edit()
        if delta:
            value = not value
        self.rows.append((label, "[x]" if value else "[ ]"))
        return bool(delta), value

    def combo(self, label: str, current: int, items: Sequence[str]) -> Tuple[bool, int]:
        delta, _ = self._take_edit()
        if delta:
            current = (current + delta) % len(items)
        self.rows.append((label, items[current]))
        return bool(delta), current

    # --- Drawing ---

    def draw(self, surface, font, x: int, y: int, width: int = 420):
        line_h = 20
        height = line_h * (len(self.rows) + 1) + 10
        pygame.draw.rect(surface, self.COLOR_BG, (x, y, width, height))
        for i, (label, value) in enumerate(self.rows):
            color = self.COLOR_SELECTED if i == self.selected else self.COLOR_TEXT
            lbl = font.render(f"{label}: {value}", True, color)
            surface.blit(lbl, (x + 8, y + 5 + i * line_h))
