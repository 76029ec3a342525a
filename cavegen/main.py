import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'cavegen' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cavegen.core.config import ConfigError, load_config, build_config
from cavegen.algo.base import GenerationError


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cave Generator: procedural dungeon and cave layouts")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate a new map")
    gen_parser.add_argument("--width", type=int, default=120, help="Map width in cells")
    gen_parser.add_argument("--height", type=int, default=90, help="Map height in cells")
    gen_parser.add_argument("--algo", type=str, default="ca", choices=["ca", "drunkard", "bsp"], help="Generation algorithm")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random seed (overrides the config file)")
    gen_parser.add_argument("--config", type=str, help="JSON config file with per-algorithm sections")
    gen_parser.add_argument("--iterations", type=int, default=4, help="Smoothing passes for the cellular automata")
    gen_parser.add_argument("--visual", action="store_true", help="Open the interactive viewer")
    gen_parser.add_argument("--record", action="store_true", help="Record the viewer to an mp4")
    gen_parser.add_argument("--print", dest="print_map", action="store_true", help="Print the map as text")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("cavegen")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        from cavegen.core.grid import Grid
        from cavegen.core.analysis import MapAnalyzer
        from cavegen.algo.factory import ALGO_NAMES, CONFIGS, SECTIONS, create_generator

        kind = ALGO_NAMES[args.algo]
        try:
            if args.config:
                logger.info(f"Loading config from {args.config}...")
                loaded = load_config(args.config)
            else:
                loaded = {"seed": None}
                loaded[SECTIONS[kind]] = build_config(CONFIGS[kind])
            grid = Grid(args.width, args.height)
        except (ConfigError, ValueError, OSError) as e:
            logger.error(f"Invalid setup: {e}")
            return 2

        seed = args.seed if args.seed is not None else loaded["seed"]
        generator = create_generator(kind, loaded[SECTIONS[kind]], seed=seed)
        logger.info(f"Generating {args.width}x{args.height} map with {kind.name} (seed={seed})...")

        if args.visual or args.record:
            from cavegen.viz.renderer import Renderer
            # The other strategies are still reachable with TAB
            others = [create_generator(k, loaded.get(SECTIONS[k]), seed=seed)
                      for k in ALGO_NAMES.values() if k != kind]
            renderer = Renderer(grid, [generator] + others, record=args.record)
            if args.record:
                from cavegen.viz.recorder import VideoRecorder
                renderer.recorder.output_file = VideoRecorder.default_path(
                    f"gen_{args.algo}_{args.width}x{args.height}")
                logger.info(f"Recording video to {renderer.recorder.output_file}")
            renderer.init_window()
            renderer.run_loop()
        else:
            logger.info("Headless generation...")
            try:
                generator.start(grid)
                passes = args.iterations if kind == ALGO_NAMES["ca"] else 1
                for _ in range(passes):
                    generator.generate(grid)
            except (ConfigError, GenerationError) as e:
                logger.error(f"Generation failed: {e}")
                return 1

        stats = MapAnalyzer.calculate_stats(grid)
        logger.info(f"Stats: {stats}")

        if args.print_map:
            print(grid.to_text())

    return 0


if __name__ == "__main__":
    sys.exit(main())
