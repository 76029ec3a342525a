from typing import Dict, Optional, Type
from cavegen.core.config import BSPConfig, CellAutomataConfig, DrunkardWalkConfig
from cavegen.algo.base import Generator, GeneratorType
from cavegen.algo.bsp import BSPGenerator
from cavegen.algo.cellular import CellAutomataGenerator
from cavegen.algo.drunkard import DrunkardWalkGenerator

GENERATORS: Dict[GeneratorType, Type[Generator]] = {
    GeneratorType.CELL_AUTOMATA: CellAutomataGenerator,
    GeneratorType.DRUNKARD_WALK: DrunkardWalkGenerator,
    GeneratorType.BSP: BSPGenerator,
}

CONFIGS = {
    GeneratorType.CELL_AUTOMATA: CellAutomataConfig,
    GeneratorType.DRUNKARD_WALK: DrunkardWalkConfig,
    GeneratorType.BSP: BSPConfig,
}

# CLI names
ALGO_NAMES = {
    "ca": GeneratorType.CELL_AUTOMATA,
    "drunkard": GeneratorType.DRUNKARD_WALK,
    "bsp": GeneratorType.BSP,
}

# Section names used by config files
SECTIONS = {
    GeneratorType.CELL_AUTOMATA: "cellular_automata",
    GeneratorType.DRUNKARD_WALK: "drunkard_walk",
    GeneratorType.BSP: "bsp",
}


def create_generator(kind: GeneratorType, config=None, seed: Optional[int] = None, rng=None) -> Generator:
    kind = GeneratorType(kind)
    if config is not None and not isinstance(config, CONFIGS[kind]):
        raise TypeError(f"{GENERATORS[kind].__name__} expects {CONFIGS[kind].__name__}, "
                        f"got {type(config).__name__}")
    return GENERATORS[kind](config, seed=seed, rng=rng)
