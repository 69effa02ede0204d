"""
Entry point for the Med Debt Optimizer.

Usage:
    python main.py              # interactive terminal comparison
    python main.py --verbose    # same, with per-strategy debug logging
"""

import argparse
import logging


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Med Debt Optimizer: compare PSLF, IDR and refinance strategies",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log each strategy's figures as they are computed",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from cli import run_cli
    run_cli()


if __name__ == "__main__":
    main()
