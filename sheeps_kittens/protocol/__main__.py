"""
Main entry point for running the text protocol engine.

Usage:
    python -m sheeps_kittens.protocol [--difficulty hard] [--mode local] [--seed 7] [--debug]
"""

import argparse
from sheeps_kittens.config import EngineConfig, default_log_file
from sheeps_kittens.protocol.interface import ProtocolEngine


def main():
    parser = argparse.ArgumentParser(description="Sheeps & Kittens text protocol engine")
    parser.add_argument("--difficulty", default="medium", help="easy, medium or hard (default: medium)")
    parser.add_argument("--mode", default="ai-kitten", help="local, ai-sheep or ai-kitten (default: ai-kitten)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for easy-mode moves")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    parser.add_argument("--log-file", default=None, help="Log path (default: ~/.sheeps_kittens/engine.log)")
    args = parser.parse_args()

    try:
        config = EngineConfig(
            difficulty=args.difficulty,
            mode=args.mode,
            seed=args.seed,
            debug=args.debug,
            log_file=args.log_file or default_log_file(),
        )
    except ValueError as e:
        parser.error(str(e))

    engine = ProtocolEngine(config)
    engine.run()


if __name__ == "__main__":
    main()
