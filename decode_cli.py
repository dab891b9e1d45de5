"""
Recover the decoding key of a textbook RSA public key and decrypt a cryptogram.

Usage:
    python decode_cli.py --n 2870558567 --e 78157 --c 1102754603
    python decode_cli.py            # prompts for N, e and c
"""
import argparse
import logging
import sys

from decoding import decode

PROMPTS = {
    "n": "Input public keys, N",
    "e": "Input public keys, e",
    "c": "Input a cryptogram, c",
}


def _read_int(prompt: str) -> int:
    print(prompt)
    return int(input().strip())


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument("--n", type=int, default=None, help="public modulus N")
    parser.add_argument("--e", type=int, default=None, help="public encryption exponent e")
    parser.add_argument("--c", type=int, default=None, help="cryptogram c")
    parser.add_argument("--timeout", type=float, default=None, help="factoring budget in seconds")
    parser.add_argument(
        "--verbosity",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.verbosity), format="%(message)s")

    values = {}
    for name, prompt in PROMPTS.items():
        value = getattr(args, name)
        if value is None:
            try:
                value = _read_int(prompt)
            except (ValueError, EOFError):
                print(f"ERROR: could not read an integer for {name}.")
                return 1
        values[name] = value

    res = decode(values["n"], values["e"], values["c"], timeout=args.timeout)
    if res.aborted:
        print(f"ERROR: {res.reason}")
        return 1

    print(f"The decoding key is {res.d}.")
    print(f"The plain text is {res.m}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
