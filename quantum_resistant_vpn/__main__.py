"""
Main entry point for the quantum-resistant VPN tool.
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from .config import configure_settings, load_environment
from .crypto import (
    CryptoEngineError, get_default_algorithm, list_classic_algorithms,
    list_post_quantum_algorithms, set_default_algorithm, test_algorithm
)

DEFAULT_TEST_DATA = "This is a test message for encryption"


# Configure logging
def setup_logging(log_level_name='INFO', log_dir: Optional[Path] = None):
    """Set up logging for the application.

    Args:
        log_level_name: The name of the logging level to use (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for system.log. Defaults to ~/.quantum_resistant_vpn/logs
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    if log_dir is None:
        log_dir = Path.home() / ".quantum_resistant_vpn" / "logs"
    log_dir.mkdir(exist_ok=True, parents=True)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_dir / "system.log"),
            logging.StreamHandler()
        ],
        force=True
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized (log level: {log_level_name.upper()})")

    return logger


def _label(post_quantum: bool) -> str:
    return "post-quantum" if post_quantum else "classic"


def cmd_show(args) -> int:
    show_classic, show_post_quantum = args.classic, args.post_quantum
    # Neither flag means both lists
    if not show_classic and not show_post_quantum:
        show_classic = show_post_quantum = True

    if show_classic:
        print("Classic encryption algorithms:")
        for algo in list_classic_algorithms():
            print(f"- {algo.name}: {algo.description}")
        print()

    if show_post_quantum:
        print("Post-quantum encryption algorithms:")
        for algo in list_post_quantum_algorithms():
            print(f"- {algo.name}: {algo.description}")

    return 0


def cmd_test(args) -> int:
    logger = logging.getLogger(__name__)
    algorithm = args.algorithm or get_default_algorithm(args.post_quantum)
    data = args.data or DEFAULT_TEST_DATA

    logger.info(f"Testing cryptographic algorithm '{algorithm}' with {len(data)} bytes of data")

    try:
        result = test_algorithm(algorithm, data.encode())
    except CryptoEngineError as e:
        logger.error(f"Error testing algorithm '{algorithm}': {e}")
        print(f"Error testing algorithm '{algorithm}': {e}")
        return 1

    print(f"Algorithm: {algorithm}")
    print(f"Original data: {data}")
    print(f"Encrypted size: {len(result.encrypted)} bytes")
    print(f"Decryption successful: {result.decryption_successful}")
    print("Performance:")
    print(f"  Key generation: {result.key_gen_time * 1000:.3f} ms")
    print(f"  Encryption: {result.encrypt_time * 1000:.3f} ms")
    print(f"  Decryption: {result.decrypt_time * 1000:.3f} ms")

    return 0 if result.decryption_successful else 2


def cmd_set_default(args) -> int:
    logger = logging.getLogger(__name__)
    try:
        set_default_algorithm(args.algorithm, args.post_quantum)
    except (CryptoEngineError, OSError) as e:
        logger.error(f"Error setting default algorithm: {e}")
        print(f"Error setting default algorithm: {e}")
        return 1

    print(f"Default {_label(args.post_quantum)} algorithm set to: {args.algorithm}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quantum_resistant_vpn",
        description="Quantum-Resistant VPN cryptographic settings"
    )
    parser.add_argument("--config", help="Settings file (default: ~/.quantum-resistant-vpn.yaml)")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default="warning",
        help="Set the logging level (default: warning)"
    )

    commands = parser.add_subparsers(dest="command", required=True)
    crypto = commands.add_parser("crypto", help="Manage cryptographic settings")
    crypto_commands = crypto.add_subparsers(dest="crypto_command", required=True)

    show = crypto_commands.add_parser("show", help="Show available cryptographic algorithms")
    show.add_argument("--classic", action="store_true", help="Show classic algorithms only")
    show.add_argument("--post-quantum", action="store_true", help="Show post-quantum algorithms only")
    show.set_defaults(func=cmd_show)

    test = crypto_commands.add_parser("test", help="Test a cryptographic algorithm")
    test.add_argument("algorithm", nargs="?", help="Algorithm name (default: configured default)")
    test.add_argument("--data", default="", help="Data to use for testing encryption")
    test.add_argument("--post-quantum", action="store_true",
                      help="Use the default post-quantum algorithm when none is given")
    test.set_defaults(func=cmd_test)

    set_default = crypto_commands.add_parser("set-default", help="Set the default encryption algorithm")
    set_default.add_argument("algorithm")
    set_default.add_argument("--post-quantum", action="store_true",
                             help="Set as default post-quantum algorithm")
    set_default.set_defaults(func=cmd_set_default)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = build_parser().parse_args(argv)

    setup_logging(log_level_name=args.log_level)
    load_environment()
    configure_settings(args.config)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
