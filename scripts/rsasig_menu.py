#!/usr/bin/env python3
"""Interactive RSA signature menu: generate keys, sign, verify, extract.

Keys are written to public_key.txt / private_key.txt (two hex lines each);
signing ``file`` produces ``file.signed``.
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rsasig import config
from rsasig.errors import RsaSigError
from rsasig.protocol import files, service

MENU = """
===== RSA DIGITAL SIGNATURE =====
1. Generate RSA keys
2. Sign a file
3. Verify a signed file
4. Extract the original message
0. Exit"""


def _ms(sec: float) -> float:
    return sec * 1000.0


def _prompt(msg: str, default: str = "") -> str:
    s = input(msg).strip()
    return default if s == "" else s


def generate_keys_menu() -> None:
    print(f"[keygen] {config.KEY_BITS}-bit key pair, Miller-Rabin with {config.MILLER_RABIN_ROUNDS} rounds...")
    t0 = time.perf_counter()
    pub, priv = service.generate_key_pair()
    t_gen = time.perf_counter() - t0
    pub_path, priv_path = files.save_keypair(pub, priv)
    print(f"[keygen] done in {_ms(t_gen):.2f} ms | saved {pub_path} and {priv_path}")


def sign_file_menu() -> None:
    target = _prompt("File to sign: ")
    key_file = _prompt(f"Private key file (default {config.PRIVATE_KEY_FILE}): ", config.PRIVATE_KEY_FILE)
    t0 = time.perf_counter()
    out = files.sign_path(target, key_file)
    print(f"[sign] {_ms(time.perf_counter() - t0):.2f} ms | saved {out}")


def verify_file_menu() -> None:
    signed = _prompt("Signed file (e.g. file.txt.signed): ")
    key_file = _prompt(f"Public key file (default {config.PUBLIC_KEY_FILE}): ", config.PUBLIC_KEY_FILE)
    t0 = time.perf_counter()
    result = files.verify_path(signed, key_file)
    elapsed = _ms(time.perf_counter() - t0)
    print("\n=========================")
    if result:
        print("SIGNATURE VALID")
    else:
        print(f"VERIFICATION FAILED ({result.reason})")
    print("=========================")
    print(f"[verify] {elapsed:.2f} ms")


def extract_message_menu() -> None:
    signed = _prompt("Signed file (e.g. file.txt.signed): ")
    message = files.extract_path(signed)
    print(f"\nMessage content: {message.decode('utf-8', errors='replace')}\n")
    if _prompt("Save the original message to a file? (y/n): ").lower() == "y":
        out = _prompt("Output file name (e.g. message.txt): ")
        files.write_atomic(out, message)
        print(f"Original message saved to '{out}'.")
    else:
        print("Original message not saved.")


ACTIONS = {
    "1": generate_keys_menu,
    "2": sign_file_menu,
    "3": verify_file_menu,
    "4": extract_message_menu,
}


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    while True:
        print(MENU)
        choice = _prompt("Choose an option: ")
        if choice == "0":
            print("Exiting...")
            return
        action = ACTIONS.get(choice)
        if action is None:
            print("Invalid option, try again.")
            continue
        try:
            action()
        except FileNotFoundError as exc:
            print(f"Error: file not found: {exc.filename}")
        except (OSError, RsaSigError) as exc:
            print(f"Error: {exc}")


if __name__ == "__main__":
    main()
