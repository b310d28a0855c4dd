import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'perfect_maze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Perfect Maze: randomized depth-first maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--width", type=int, default=40, help="Maze Width")
    gen_parser.add_argument("--height", type=int, default=30, help="Maze Height")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--start", type=int, nargs=2, default=(0, 0), metavar=("X", "Y"), help="Start cell")
    gen_parser.add_argument("--visual", action="store_true", help="Show generation in a window")
    gen_parser.add_argument("--record", action="store_true", help="Record generation video")
    gen_parser.add_argument("--image", type=str, help="Save the finished maze as an image")
    gen_parser.add_argument("--cell-size", type=int, default=16, help="Pixels per cell for --image")

    # Stats Command
    stats_parser = subparsers.add_parser("stats", help="Generate a maze and print its structure")
    stats_parser.add_argument("--width", type=int, default=40, help="Maze Width")
    stats_parser.add_argument("--height", type=int, default=30, help="Maze Height")
    stats_parser.add_argument("--seed", type=int, default=None, help="Random Seed")

    return parser

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("perfect_maze")

    if args.command is None:
        parser.print_help()
        return 0

    from perfect_maze.core.board import make_board, InvalidDimension
    from perfect_maze.algo.dfs import RecursiveBacktracker

    try:
        board = make_board((args.width, args.height))
    except InvalidDimension as e:
        logger.error(str(e))
        return 2

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        start = tuple(args.start)
        if not board.in_bounds(*start):
            logger.error(f"Start {start} is outside the {args.width}x{args.height} board")
            return 2

        logger.info(f"Generating {args.width}x{args.height} maze from {start} (seed={args.seed})...")
        generator = RecursiveBacktracker(board, seed=args.seed, start=start)

        if args.visual or args.record:
            logger.info("Visual mode enabled - Opening window...")
            from perfect_maze.viz.renderer import Renderer
            # Report every carve so the window can animate it
            generator.PROGRESS_EVERY = 1
            renderer = Renderer(board, generator=generator, record=args.record)

            if args.record:
                import datetime
                if not os.path.exists("recordings"):
                    os.makedirs("recordings")
                ts = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
                fname = f"gen_dfs_{args.width}x{args.height}_{ts}.mp4"
                renderer.recorder.output_file = os.path.join("recordings", fname)
                logger.info(f"Recording video to {renderer.recorder.output_file}")

            renderer.init_window()
            renderer.run_loop()
            if not renderer.gen_finished:
                logger.warning("Window closed before generation finished")
                return 1
        else:
            logger.info("Headless generation...")
            generator.run_all()

        logger.info(f"Carved {generator.carved} passages.")

        if args.image:
            from perfect_maze.viz.renderer import save_image
            save_image(board, args.image, cell_size=args.cell_size)

    elif args.command == "stats":
        from perfect_maze.core.analysis import calculate_stats, is_perfect
        RecursiveBacktracker(board, seed=args.seed).run_all()
        stats = calculate_stats(board)

        print(f"\n{'METRIC':<20} | {'VALUE':<10}")
        print("-" * 33)
        for key, value in stats.items():
            if isinstance(value, float):
                print(f"{key:<20} | {value:<10.2f}")
            else:
                print(f"{key:<20} | {value:<10}")
        print(f"{'perfect':<20} | {is_perfect(board)!s:<10}")

    return 0

if __name__ == "__main__":
    sys.exit(main())
