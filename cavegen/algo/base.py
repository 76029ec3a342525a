import random
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Iterator, Optional, Protocol, Sequence, Tuple
from cavegen.core.grid import Grid


class GeneratorType(IntEnum):
    CELL_AUTOMATA = 0
    DRUNKARD_WALK = 1
    BSP = 2


class GenerationError(RuntimeError):
    """Raised when a generator is driven outside of its contract."""


class UISurface(Protocol):
    """
    Immediate-mode widget surface handed to Generator.render_gui().
    Every widget returns (changed, new_value), pyimgui style.
    """

    def input_float(self, label: str, value: float, step: float = 0.0,
                    step_fast: float = 0.0) -> Tuple[bool, float]: ...

    def input_int(self, label: str, value: int, step: int = 1,
                  step_fast: int = 10) -> Tuple[bool, int]: ...

    def checkbox(self, label: str, value: bool) -> Tuple[bool, bool]: ...

    def combo(self, label: str, current: int, items: Sequence[str]) -> Tuple[bool, int]: ...


class Generator(ABC):
    def __init__(self, config=None, seed: Optional[int] = None,
                 rng: Optional[random.Random] = None):
        self.config = config
        self.seed = seed
        # Each generator owns its random source; never share across threads
        self.rng = rng if rng is not None else random.Random(seed)
        self.step_count = 0

    @abstractmethod
    def kind(self) -> GeneratorType:
        pass

    @abstractmethod
    def start(self, grid: Grid):
        """Resets the grid to this strategy's initial state. Safe to call again to restart."""
        pass

    @abstractmethod
    def generate(self, grid: Grid):
        """Runs the algorithm to its own completion condition."""
        pass

    @abstractmethod
    def step(self, grid: Grid):
        """Performs a single increment, for animated generation."""
        pass

    @abstractmethod
    def render_gui(self, ui: UISurface):
        """Lets a UI surface edit this generator's configuration in place."""
        pass

    def run(self, grid: Grid, steps: int) -> Iterator[str]:
        """
        Yields a status string after each step.
        The actual grid modifications happen in-place on grid.
        """
        for _ in range(steps):
            self.step(grid)
            yield f"{self.kind().name}: step {self.step_count}"
