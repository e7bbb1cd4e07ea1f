"""
MIT License

Copyright (c) 2024 The-Sycorax (https://github.com/The-Sycorax)

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE+= OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""

import argparse
import logging
import re
import sys
import threading
import time
import traceback

from shutil import get_terminal_size

from humanfriendly import format_timespan

from vanity_gen.base58 import b58_chars
from vanity_gen.config import (
    ALTERNATE_DISPLAY_TAG,
    CURVE,
    DEFAULT_CONFIG,
    HEX_ADDRESS_LENGTH,
    HEX_DISPLAY_PREFIX,
    SearchConfig,
)
from vanity_gen.curve import CURVES
from vanity_gen.search import SearchRequest
from vanity_gen.stats import vanity_generation_stats
from vanity_gen.wallet import to_alternate_address, to_checksum_address, wallet_from_private_key
from vanity_gen.worker import ParallelSearch


class ProgressDisplay:

    # Heading message for display during address generation.
    HEADING_MESSAGE_LINES = [
        "┏━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━┓\n",
        "┃ Vanity Address Generator v1.0  ┃\n",
        "┗━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━┛\n"
    ]

    # Define the structure of the progress message for display during address generation.
    PROGRESS_MESSAGE_LINES = [
        "┏━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━┓\n",
        "┃ - Difficulty: {}{}┃\n",
        "┃                                                              ┃\n",
        "┃ - Addresses Generated: {}{}┃\n",
        "┃ - Speed: {} Addr/s{}┃\n",
        "┃ - Time elapsed: {}{}┃\n",
        "┃ - Probability: {}{}┃\n",
        "┃ - 50% chance in: {}{}┃\n",
        "┗━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━┛\n",
    ]

    def __init__(self, request: SearchRequest, silent: bool = False):
        self.request = request
        self.silent = silent
        self.start_time = time.time()
        self.count = 0
        self.console_msg = ""
        self.run_progress_thread = False
        self.progress_thread = threading.Thread(target=self.update_progress, daemon=True)

    def start(self):
        self.start_time = time.time()
        self.run_progress_thread = True
        self.progress_thread.start()

    def stop(self):
        self.run_progress_thread = False
        if self.progress_thread.is_alive():
            self.progress_thread.join()

    def set_count(self, count: int):
        self.count = count

    def render(self) -> str:
        """
        Assembles the progress box from the current count and elapsed time.
        """
        time_elapsed = time.time() - self.start_time
        attempts_per_second = self.count / time_elapsed if time_elapsed > 0 else 0

        stats = vanity_generation_stats(self.request.pattern, self.request.case_sensitive,
                                        self.request.use_alternate_format, int(attempts_per_second), self.count)

        # Format the expected attempts to adjust space dynamically.
        if stats['expected_attempts'] < 2**64:
            difficulty_str = "{:,.0f}".format(stats['expected_attempts'])
        else:
            difficulty_str = "{:e}".format(stats['expected_attempts'])

        addresses_str = "{:,}".format(self.count)
        speed_str = "{:,.0f}".format(attempts_per_second)
        time_elapsed_str = format_timespan(int(time_elapsed))
        probability_str = "{:.2f}%".format(stats['probability'] * 100)
        estimated_time_str = stats['expected_time_readable']

        # Calculate padding for each line to align the ending char ┃.
        padding_difficulty = " " * max(64 - len(difficulty_str) - 17, 1)
        padding_addresses = " " * max(64 - len(addresses_str) - 26, 1)
        padding_speed = " " * max(64 - len(speed_str) - 19, 1)
        padding_elapsed = " " * max(64 - len(time_elapsed_str) - 19, 1)
        padding_probability = " " * max(64 - len(probability_str) - 18, 1)
        padding_estimated = " " * max(64 - len(estimated_time_str) - 20, 1)

        return "".join(self.PROGRESS_MESSAGE_LINES).format(
            difficulty_str, padding_difficulty,
            addresses_str, padding_addresses,
            speed_str, padding_speed,
            time_elapsed_str, padding_elapsed,
            probability_str, padding_probability,
            estimated_time_str, padding_estimated
        )

    def update_progress(self):
        """
        Redraws the heading and progress box until stopped, every 0.1 seconds to limit resource usage.
        """
        while self.run_progress_thread:
            terminal_width = get_terminal_size().columns
            heading_message = "".join(self.HEADING_MESSAGE_LINES)
            update_buffer = [
                "\033c",
                "\n".join(line[:terminal_width] for line in heading_message.split("\n")) + "\n",
                self.console_msg + "\n\n",
            ]
            if not self.silent:
                update_buffer.append("\n".join(line[:terminal_width] for line in self.render().split("\n")))

            # Print the final output in one go
            print(''.join(update_buffer), end="\r")
            time.sleep(0.1)


class ArgParseHelpers:

    @staticmethod
    def setup_logging():
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.INFO)

        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

        # Clear any existing handlers from the root logger and add our handler
        root_logger.handlers = []
        root_logger.addHandler(handler)

    def check_args(self, args):
        """
        Validates the combinations and formats of the CLI arguments.
        Errors are reported through logging and the process is terminated if invalid arguments are found.

        Parameters:
        - args (argparse.Namespace): The argparse namespace containing parsed arguments.
        """
        if args.private_key:
            context_str = "It must be a hexadecimal string and 64 characters in length."

            if args.pattern:
                sorted_args = self.sort_arguments_based_on_input(['-private_key', '-pattern'])
                logging.error(f"{sorted_args} cannot be used together.")
                sys.exit(1)

            private_key = args.private_key[2:] if args.private_key.startswith('0x') else args.private_key
            if len(private_key) != 64:
                logging.error(f"Private key is too {'long' if len(private_key) > 64 else 'short'} ({len(private_key)} Characters). {context_str}")
                sys.exit(1)

            if not re.match(r'^[0-9a-fA-F]{64}$', private_key):
                logging.error(f"The provided private key is not valid. {context_str}")
                sys.exit(1)

        if args.pattern is not None:
            if args.alternate and args.case_sensitive:
                max_length, char_pattern, kind = DEFAULT_CONFIG.alternate_body_length, r'^[1-9A-HJ-NP-Za-km-z]$', "Base58"
            elif args.alternate:
                # Every letter has at least one case in the Base58 alphabet.
                max_length, char_pattern, kind = DEFAULT_CONFIG.alternate_body_length, r'^[1-9A-Za-z]$', "Base58"
            else:
                max_length, char_pattern, kind = HEX_ADDRESS_LENGTH, r'^[0-9a-fA-F]$', "hexadecimal"

            if not 0 < len(args.pattern) <= max_length:
                logging.error(f"Address pattern must be 1 to {max_length} characters in length ({len(args.pattern)} Characters).\
                              \nAnything more than 5 characters may take a long time to generate depending on your hardware.")
                sys.exit(1)

            if any(not re.match(char_pattern, char) for char in args.pattern):
                highlighted = self.highlight_non_matching_characters(args.pattern, char_pattern)
                logging.error(f"Invalid {kind} characters in address pattern (highlighted in red): {highlighted}")
                sys.exit(1)

        if args.batch_size is not None and args.batch_size < 1:
            logging.error("Batch size must be at least 1.")
            sys.exit(1)

    def highlight_non_matching_characters(self, text, pattern):
        """
        Highlights characters in a string that do not match a given regex pattern.

        Args:
        text (str): The text to be scanned.
        pattern (str): Regex a single valid character must match.

        Returns:
        str: The original text with non-matching characters highlighted in red.
        """
        regex = re.compile(pattern)
        highlighted_text = ""
        for char in text:
            if not regex.match(char):
                highlighted_text += f"\033[91m{char}\033[0m"
            else:
                highlighted_text += char
        return highlighted_text

    @staticmethod
    def sort_arguments_based_on_input(argument_names):
        """
        Sorts CLI argument names by their position in sys.argv and joins them
        as "a, and b". Arguments absent from sys.argv are dropped, unless none are present.
        """
        processed_argv = [arg.split('=')[0] for arg in sys.argv]
        filtered_args = [arg for arg in argument_names if arg in processed_argv] or list(argument_names)
        sorted_args = sorted(filtered_args, key=lambda x: processed_argv.index(x) if x in processed_argv else len(processed_argv))

        if len(sorted_args) > 1:
            result = ', '.join(sorted_args[:-1]) + ', and ' + sorted_args[-1]
        elif sorted_args:
            result = sorted_args[0]
        else:
            result = ''
        return result


def build_parser():
    parser = argparse.ArgumentParser(description="Generates vanity addresses matching a prefix or suffix.")

    parser.add_argument("-pattern", type=str, help="The characters the address must start (or end) with.")
    parser.add_argument("-suffix", help="Match the pattern at the end of the address instead of the start.", action='store_true')
    parser.add_argument("-case_sensitive", help="Match the case of the pattern. Hex addresses are matched against their checksum casing.", action='store_true')
    parser.add_argument("-alternate", help="Search the Base58Check address format instead of the hex format.", action='store_true')
    parser.add_argument("-workers", type=int, default=None, help="Number of search processes. Defaults to the number of CPUs.")
    parser.add_argument("-batch_size", type=int, default=None, help="Attempts between two progress updates.")
    parser.add_argument("-curve", type=str, default=CURVE, choices=sorted(CURVES), help="Elliptic curve used to generate keys.")
    parser.add_argument("-silent", help="Suppresses progress output when generating a vanity address.", action='store_true')
    parser.add_argument("-private_key", type=str, help="A private key to derive a single address from. Must be a hexadecimal private key and 64 characters in length. This argument is separate from vanity address generation and should be used independently.")
    return parser


def show_private_key(args):
    wallet = wallet_from_private_key(args.private_key, args.curve)
    print(f"\nPrivate Key: 0x{wallet.private_key_hex}\
            \nAddress: {HEX_DISPLAY_PREFIX}{to_checksum_address(wallet.address_hex)}\
            \nAlternate Address: {ALTERNATE_DISPLAY_TAG}{to_alternate_address(wallet.address)}\n")


def search(args):
    config = SearchConfig(batch_size=args.batch_size or DEFAULT_CONFIG.batch_size, curve=args.curve)
    request = SearchRequest(
        pattern=args.pattern,
        case_sensitive=args.case_sensitive,
        use_alternate_format=args.alternate,
        match_at_suffix=args.suffix,
    )
    display = ProgressDisplay(request, args.silent)
    edge = "ending with" if args.suffix else "starting with"
    display.console_msg = f'WARNING: This operation continuously generates addresses until a match with the given pattern is found.\
                            \nThis may be resource intensive. Press Ctrl+C to exit.\n\nGenerating vanity address {edge}: "{args.pattern}"'

    parallel_search = ParallelSearch(request, args.workers, config)
    display.start()
    try:
        result = parallel_search.run(on_progress=display.set_count)
    finally:
        display.stop()

    print(f"\nFound matching address!\n\
            \nPrivate Key: 0x{result.private_key}\
            \nAddress: {result.address}\
            \nAttempts: {parallel_search.attempts:,}\n")


# Overview:
# This serves as the main entry point for the command-line vanity address generator.
# It either derives the address of a given private key or searches for an address
# matching a pattern, optionally in silent mode to suppress progress output.
def main(argv=None):
    argParseHelpers = ArgParseHelpers()
    argParseHelpers.setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.private_key and args.pattern is None:
        parser.print_help()
        return

    argParseHelpers.check_args(args)

    if args.private_key:
        show_private_key(args)
    else:
        search(args)


def run():
    try:
        main()
    except KeyboardInterrupt:
        print("\r  ")
        print("\rProcess terminated by user.")
    except Exception as e:
        print("\r  ")
        print(f"\r\033[91mGuru Meditation Error:\033[0m\n{e}")
        traceback.print_exc()
        sys.exit(1)
    sys.exit(0)
