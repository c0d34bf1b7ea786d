import argparse
import logging
import time

from loop_cppn import RenderConfig, generate
from loop_cppn.export import save_gif
from loop_cppn.logging_config import setup_logging


def parse_args():
    """Parses command-line arguments."""
    parser = argparse.ArgumentParser(description="Generate a looping animated CPPN GIF.")
    parser.add_argument("--name", default=str(time.time_ns()), help="name of the exported GIF (without extension)")
    parser.add_argument("--width", type=int, default=200, help="width of the exported image")
    parser.add_argument("--height", type=int, default=200, help="height of the exported image")
    parser.add_argument("--sharpness", type=float, default=0.07, help="sharpness of the image")
    parser.add_argument("--focus", type=float, default=1.0, help="focus to the center of the image")
    parser.add_argument("--seed", type=int, default=0, help="seed for the network weights")
    parser.add_argument("--depth", type=int, default=12, help="number of hidden layers")
    parser.add_argument("--size", type=int, default=24, help="number of neurons in a hidden layer")
    parser.add_argument("--pattern", action="store_true", help="export a patterned image")
    parser.add_argument("--density", type=float, default=1.0, help="density of patterns (only with --pattern)")
    parser.add_argument("--gray", action="store_true", help="export a black and white image")
    parser.add_argument("--frames", type=int, default=60, help="number of frames in one loop")
    parser.add_argument("--partitions", type=int, default=4, help="number of parallel tasks per frame")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every frame")
    return parser.parse_args()


def config_from_args(args) -> RenderConfig:
    return RenderConfig(
        name=args.name,
        width=args.width,
        height=args.height,
        sharpness=args.sharpness,
        focus=args.focus,
        seed=args.seed,
        depth=args.depth,
        size=args.size,
        pattern=args.pattern,
        density=args.density,
        gray=args.gray,
        num_frames=args.frames,
        partitions=args.partitions,
    )


def main(args):
    """Runs the main script logic."""
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    config = config_from_args(args)
    print(f"Output filename: {config.filename}")

    generate(config, encoder=lambda animation: save_gif(animation, config.filename))
    print(f"Animation saved to {config.filename}")


if __name__ == "__main__":
    args = parse_args()
    main(args)
