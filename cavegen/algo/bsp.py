"""
Binary space partition rooms and corridors.

The map is split recursively into a binary tree of rectangles, each leaf
may receive a room, then sibling subtrees are joined bottom-up by a
corridor between one representative room from each side. As long as
every leaf gets a room, every room ends up reachable from every other.
"""
import logging
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple
from cavegen.core.grid import Grid, CellState
from cavegen.core.config import BSPConfig
from cavegen.algo.base import Generator, GeneratorType, GenerationError, UISurface

logger = logging.getLogger(__name__)


@dataclass
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        """One past the right-most column."""
        return self.x + self.width

    @property
    def y2(self) -> int:
        """One past the bottom row."""
        return self.y + self.height

    def contains(self, other: 'Rect', margin: int = 0) -> bool:
        return (other.x >= self.x + margin and other.y >= self.y + margin and
                other.x2 <= self.x2 - margin and other.y2 <= self.y2 - margin)

    def random_point(self, rng: random.Random) -> Tuple[int, int]:
        """(row, col) away from the edges when the rect is wide enough."""
        lo_c, hi_c = (self.x + 1, self.x2 - 2) if self.width >= 3 else (self.x, self.x2 - 1)
        lo_r, hi_r = (self.y + 1, self.y2 - 2) if self.height >= 3 else (self.y, self.y2 - 1)
        col = rng.randint(lo_c, hi_c)
        row = rng.randint(lo_r, hi_r)
        return row, col


class BSPNode:
    """
    Partition tree node. Either a leaf (no children, maybe a room) or an
    internal node whose two children tile its area exactly.
    Config and RNG are passed in by the caller, never stored.
    """

    __slots__ = ('area', 'room', 'left', 'right', 'depth')

    def __init__(self, area: Rect, depth: int = 0):
        self.area = area
        self.room: Optional[Rect] = None
        self.left: Optional['BSPNode'] = None
        self.right: Optional['BSPNode'] = None
        self.depth = depth

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def leaves(self) -> Iterator['BSPNode']:
        if self.is_leaf():
            yield self
        else:
            yield from self.left.leaves()
            yield from self.right.leaves()

    def split(self, config: BSPConfig, rng: random.Random) -> bool:
        """Recursively partitions this node. Returns False if it stays a leaf."""
        if config.max_depth >= 0 and self.depth >= config.max_depth:
            return False

        area = self.area
        horizontal = rng.random() < config.horiz_split_probability
        # Elongated areas are always cut across their long side
        if area.width / area.height >= 1.0 + config.split_v_ratio:
            horizontal = False
        elif area.height / area.width > 1.0 + config.split_h_ratio:
            horizontal = True

        if horizontal:
            min_size = config.min_height
            max_size = area.height - config.min_height
        else:
            min_size = config.min_width
            max_size = area.width - config.min_width
        if max_size <= min_size:
            return False

        offset = rng.randint(min_size, max_size)
        if horizontal:
            top = Rect(area.x, area.y, area.width, offset)
            bottom = Rect(area.x, area.y + offset, area.width, area.height - offset)
            self.left, self.right = BSPNode(top, self.depth + 1), BSPNode(bottom, self.depth + 1)
        else:
            west = Rect(area.x, area.y, offset, area.height)
            east = Rect(area.x + offset, area.y, area.width - offset, area.height)
            self.left, self.right = BSPNode(west, self.depth + 1), BSPNode(east, self.depth + 1)

        self.left.split(config, rng)
        self.right.split(config, rng)
        return True

    def get_room(self, rng: random.Random) -> Optional[Rect]:
        """
        Representative room of this subtree. When both sides have one, the
        pick is a flat coin flip, whatever the subtree sizes.
        """
        if self.room is not None:
            return self.room

        left_room = self.left.get_room(rng) if self.left is not None else None
        right_room = self.right.get_room(rng) if self.right is not None else None

        if left_room is None:
            return right_room
        if right_room is None:
            return left_room
        return left_room if rng.random() < 0.5 else right_room


def carve_rect(grid: Grid, rect: Rect):
    for row in range(rect.y, rect.y2):
        for col in range(rect.x, rect.x2):
            grid.set(row, col, CellState.EMPTY)


def carve_segment(grid: Grid, r1: int, c1: int, r2: int, c2: int):
    """Carves a 1-cell wide axis aligned segment, both ends included."""
    if r1 != r2 and c1 != c2:
        raise ValueError(f"Segment ({r1},{c1})-({r2},{c2}) is not axis aligned")
    for row in range(min(r1, r2), max(r1, r2) + 1):
        for col in range(min(c1, c2), max(c1, c2) + 1):
            grid.set(row, col, CellState.EMPTY)


def carve_corridor(grid: Grid, room_a: Rect, room_b: Rect, rng: random.Random):
    r1, c1 = room_a.random_point(rng)
    r2, c2 = room_b.random_point(rng)

    if r1 == r2 and c1 == c2:
        return
    if r1 == r2 or c1 == c2:
        carve_segment(grid, r1, c1, r2, c2)
        return

    # Random elbow so corridors don't all bend the same way
    if rng.random() < 0.5:
        corner = (r1, c2)
    else:
        corner = (r2, c1)
    carve_segment(grid, r1, c1, *corner)
    carve_segment(grid, *corner, r2, c2)


class BSPGenerator(Generator):
    def __init__(self, config: Optional[BSPConfig] = None, seed=None, rng=None):
        super().__init__(config or BSPConfig(), seed=seed, rng=rng)
        self.tree: Optional[BSPNode] = None
        self.generated = False

    def kind(self) -> GeneratorType:
        return GeneratorType.BSP

    def start(self, grid: Grid):
        self.config.validate()
        grid.fill(CellState.WALL)
        # Old tree (rooms included) is dropped wholesale
        self.tree = BSPNode(Rect(0, 0, grid.cols, grid.rows))
        self.generated = False
        self.step_count = 0

    def step(self, grid: Grid):
        # Not incremental
        pass

    def rooms(self) -> List[Rect]:
        if self.tree is None:
            return []
        return [leaf.room for leaf in self.tree.leaves() if leaf.room is not None]

    def generate(self, grid: Grid):
        if self.tree is None:
            raise GenerationError("BSPGenerator.generate() called before start()")
        if self.generated:
            logger.debug("Tree already used, restarting")
            self.start(grid)

        cfg = self.config
        cfg.validate()
        if grid.cols < cfg.min_width or grid.rows < cfg.min_height:
            raise GenerationError(
                f"Grid {grid.cols}x{grid.rows} is smaller than the minimum leaf "
                f"{cfg.min_width}x{cfg.min_height}")
        if (self.tree.area.width, self.tree.area.height) != (grid.cols, grid.rows):
            raise GenerationError("Grid size changed since start()")

        # 1. Split
        self.tree.split(cfg, self.rng)

        # 2. Populate
        leaves = list(self.tree.leaves())
        for leaf in leaves:
            if self.rng.random() < cfg.empty_room_probability:
                continue
            self.place_room(leaf, grid)

        # 3. Connect
        self.connect(self.tree, grid)
        self.generated = True

        logger.debug("BSP: %d leaves, %d rooms", len(leaves), len(self.rooms()))

    def place_room(self, leaf: BSPNode, grid: Grid):
        cfg = self.config
        area = leaf.area
        height = self.rng.randint(cfg.min_room_height, cfg.max_room_height)
        width = self.rng.randint(cfg.min_room_width, cfg.max_room_width)

        # One cell of wall kept on every side of the leaf
        x = area.x + self.rng.randint(1, area.width - width - 1)
        y = area.y + self.rng.randint(1, area.height - height - 1)

        leaf.room = Rect(x, y, width, height)
        carve_rect(grid, leaf.room)

    def connect(self, node: BSPNode, grid: Grid):
        if node.is_leaf():
            return
        self.connect(node.left, grid)
        self.connect(node.right, grid)

        left_room = node.left.get_room(self.rng)
        right_room = node.right.get_room(self.rng)
        if left_room is not None and right_room is not None:
            carve_corridor(grid, left_room, right_room, self.rng)

    def render_gui(self, ui: UISurface):
        cfg = self.config
        _, cfg.min_width = ui.input_int("Min leaf width", cfg.min_width)
        _, cfg.min_height = ui.input_int("Min leaf height", cfg.min_height)
        _, cfg.min_room_width = ui.input_int("Min room width", cfg.min_room_width)
        _, cfg.max_room_width = ui.input_int("Max room width", cfg.max_room_width)
        _, cfg.min_room_height = ui.input_int("Min room height", cfg.min_room_height)
        _, cfg.max_room_height = ui.input_int("Max room height", cfg.max_room_height)
        _, cfg.horiz_split_probability = ui.input_float(
            "Horizontal split probability", cfg.horiz_split_probability, 0.05, 0.1)
        _, cfg.split_h_ratio = ui.input_float("Force horizontal above h/w - 1", cfg.split_h_ratio, 0.05, 0.1)
        _, cfg.split_v_ratio = ui.input_float("Force vertical above w/h - 1", cfg.split_v_ratio, 0.05, 0.1)
        _, cfg.empty_room_probability = ui.input_float(
            "Empty room probability", cfg.empty_room_probability, 0.01, 0.05)
        _, cfg.max_depth = ui.input_int("Max depth (-1 = unlimited)", cfg.max_depth)
