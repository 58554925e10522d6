import argparse
import logging
import random
import threading

from pylogswing import (
    Config,
    InlineGradient,
    MultiLineGradient,
    SwingLogger,
)

SAMPLE_WORDS = (
    "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod tempor "
    "incididunt ut labore et dolore magna aliqua"
).split()


def build_color_format(name: str, steps: int):
    if name == "inline":
        return InlineGradient(steps)
    if name == "multi-line":
        return MultiLineGradient(steps)
    return name


def log_sample_messages(count: int) -> None:
    # Weighted towards INFO, like a real application.
    for _ in range(count):
        message = " ".join(random.choices(SAMPLE_WORDS, k=random.randint(1, 12)))
        roll = random.randint(0, 14)
        if roll == 0:
            logging.log(5, message)
        elif roll == 1:
            logging.debug(message)
        elif roll == 3:
            logging.warning(message)
        elif roll == 4:
            logging.error(message)
        else:
            logging.info(message)


def main() -> None:
    parser = argparse.ArgumentParser(description="pylogswing usage example")
    parser.add_argument(
        "--color-format",
        choices=["none", "solid", "inline", "multi-line"],
        default="multi-line",
        help="Coloring strategy",
    )
    parser.add_argument("--steps", type=int, default=20, help="Gradient steps")
    parser.add_argument(
        "--record-format", choices=["simple", "json"], default="simple", help="Line layout"
    )
    parser.add_argument(
        "--theme", choices=["spectral", "dual_tone"], default="spectral", help="Color theme"
    )
    parser.add_argument("--threads", type=int, default=1, help="Concurrent logging threads")
    parser.add_argument("--count", type=int, default=40, help="Messages per thread")
    args = parser.parse_args()

    config = Config(
        level="TRACE",
        record_format=args.record_format,
        color_format=build_color_format(args.color_format, args.steps),
        theme=args.theme,
    )
    SwingLogger(config).init()

    workers = [
        threading.Thread(target=log_sample_messages, args=(args.count,), name=f"worker-{idx}")
        for idx in range(args.threads)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()


if __name__ == "__main__":
    main()
