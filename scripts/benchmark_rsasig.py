#!/usr/bin/env python3
"""Time key generation, signing, verification and hashing; write tables + figures.

Outputs:
- artifacts/benchmark_rsasig.xlsx
- artifacts/fig_rsasig.png
"""

from __future__ import annotations

import json
import os
import secrets
import sys
import time
from pathlib import Path
from typing import Dict, List

ROOT = Path(__file__).resolve().parents[1]
ART = ROOT / "artifacts"
ART.mkdir(parents=True, exist_ok=True)

# Avoid matplotlib writing cache under a non-writable home directory.
os.environ.setdefault("MPLCONFIGDIR", str(ART / ".mplconfig"))

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from openpyxl import Workbook
from openpyxl.utils import get_column_letter

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rsasig.crypto import signature as rsa
from rsasig.crypto.keccak import sha3_256
from rsasig.crypto.keys import generate_keypair

KEY_SIZES = [1024, 1536, 2048]
HASH_SIZES = [0, 1024, 16 * 1024, 128 * 1024]
RUNS = 3


def _ms(sec: float) -> float:
    return sec * 1000.0


def _prompt_int(msg: str, default: int) -> int:
    s = input(msg).strip()
    return default if s == "" else int(s)


def bench_key_size(bits: int, runs: int) -> Dict[str, float]:
    t_keygen = t_sign = t_verify = 0.0
    message = b"hello world"
    for _ in range(runs):
        t0 = time.perf_counter()
        pair = generate_keypair(bits)
        t_keygen += time.perf_counter() - t0

        t0 = time.perf_counter()
        sig = rsa.sign(pair.private, message)
        t_sign += time.perf_counter() - t0

        t0 = time.perf_counter()
        ok = rsa.verify(pair.public, message, sig)
        t_verify += time.perf_counter() - t0
        if not ok:
            raise RuntimeError(f"self-check failed at {bits} bits: {ok.reason}")
    return {"keygen": t_keygen / runs, "sign": t_sign / runs, "verify": t_verify / runs}


def bench_hash(size: int, runs: int) -> float:
    data = secrets.token_bytes(size)
    t0 = time.perf_counter()
    for _ in range(runs):
        sha3_256(data)
    return (time.perf_counter() - t0) / runs


def _write_table(ws, headers: List[str], rows: List[List], start_row: int = 1, start_col: int = 1) -> None:
    for j, h in enumerate(headers, start=start_col):
        ws.cell(row=start_row, column=j, value=h)
    for i, row in enumerate(rows, start=start_row + 1):
        for j, val in enumerate(row, start=start_col):
            ws.cell(row=i, column=j, value=val)
    for j in range(start_col, start_col + len(headers)):
        ws.column_dimensions[get_column_letter(j)].width = 16


def main() -> None:
    runs = _prompt_int(f"Runs per configuration (default {RUNS}): ", RUNS)

    print("[1/3] Timing keygen/sign/verify…")
    rows_rsa = []
    for bits in KEY_SIZES:
        res = bench_key_size(bits, runs)
        print(
            f"  {bits} bits | keygen {_ms(res['keygen']):.2f} ms | sign {_ms(res['sign']):.2f} ms"
            f" | verify {_ms(res['verify']):.2f} ms"
        )
        rows_rsa.append([bits, round(_ms(res["keygen"]), 3), round(_ms(res["sign"]), 3), round(_ms(res["verify"]), 3)])

    print("[2/3] Timing SHA3-256…")
    rows_hash = []
    for size in HASH_SIZES:
        sec = bench_hash(size, runs)
        mb_s = (size / (1024 * 1024)) / sec if size and sec else 0.0
        print(f"  {size} bytes | {_ms(sec):.2f} ms | {mb_s:.3f} MiB/s")
        rows_hash.append([size, round(_ms(sec), 3), round(mb_s, 3)])

    wb = Workbook()
    ws1 = wb.active
    ws1.title = "RSA"
    _write_table(ws1, ["Key_Bits", "Keygen_ms", "Sign_ms", "Verify_ms"], rows_rsa)
    ws2 = wb.create_sheet("SHA3_256")
    _write_table(ws2, ["Input_Bytes", "Hash_ms", "MiB_per_s"], rows_hash)
    xlsx_path = ART / "benchmark_rsasig.xlsx"
    wb.save(xlsx_path)

    print("[3/3] Generating figure…")
    bits = [r[0] for r in rows_rsa]
    fig, axs = plt.subplots(1, 2, figsize=(12, 4))
    axs[0].plot(bits, [r[1] for r in rows_rsa], marker="o", label="keygen")
    axs[0].set_title("Key generation")
    axs[0].set_xlabel("Key size (bits)")
    axs[0].set_ylabel("Time (ms)")
    axs[1].plot(bits, [r[2] for r in rows_rsa], marker="o", color="tab:orange", label="sign")
    axs[1].plot(bits, [r[3] for r in rows_rsa], marker="o", color="tab:green", label="verify")
    axs[1].set_title("Sign / verify")
    axs[1].set_xlabel("Key size (bits)")
    axs[1].legend()
    for ax in axs:
        ax.grid(True, linestyle="--", linewidth=0.5)
    fig.tight_layout()
    fig_path = ART / "fig_rsasig.png"
    fig.savefig(fig_path, dpi=200)
    plt.close(fig)

    result = {
        "runs": runs,
        "rsa_ms": {str(r[0]): {"keygen": r[1], "sign": r[2], "verify": r[3]} for r in rows_rsa},
        "sha3_256_ms": {str(r[0]): r[1] for r in rows_hash},
    }
    print("\n--- JSON ---")
    print(json.dumps(result, indent=2))
    print(f"Saved: {xlsx_path}")
    print(f"Saved: {fig_path}")


if __name__ == "__main__":
    main()
