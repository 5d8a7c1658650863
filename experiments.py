"""
Huffman Zipper experiments and report

Prints a compression report for each book, then runs repeated experiments
and writes the data for the write-up.

Outputs (in --outdir):
  - metrics.csv     (raw row per run per configuration)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts)

How to run:
  python experiments.py --books books/alice.txt books/moby_dick.txt
  python experiments.py --outdir results --runs 5 --exp1_size_kb 64
  python experiments.py --runs 3 --exp1_generators english_like,zipf64 --no_plots

Pipelines:
  optimized   code book built from the text itself
  reference   built-in English letter book, applied to the letters of the text
"""

from __future__ import annotations

import argparse
import csv
import random
import statistics
import string
import time
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt

import constants
from codebook import CodeBook
from errors import HuffmanError
from util import load_file
from zipper import Zipper


PIPELINES = ("optimized", "reference")


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def letters_only(text: str) -> str:
    # The reference book only knows lowercase a-z
    return "".join(ch for ch in text.lower() if ch in constants.ALPHABET)

def percent(part: float, whole: float) -> float:
    return 100.0 * part / whole if whole else 0.0


# Report (one book at a time)

def print_report(name: str, text: str) -> bool:
    """
    Runs the whole pipeline on text and prints the statistics.
    Returns True when the recovered text equals the original.
    """
    print()
    print(f"== {name} ==")
    print(f"The original text has {len(text)} characters.")
    book = CodeBook(text)
    print(f"The code book covers {book.size()} characters.")
    print(f"The average length of a code is {book.get_weighted_average():.2f} bits.")

    zipper = Zipper(book)
    bits = zipper.encode(text)
    plain_bits = len(text) * constants.BITE_SIZE
    print(f"The text is encoded in {len(bits)} bits.")
    print(f"The savings is {plain_bits - len(bits)} bits ({percent(plain_bits - len(bits), plain_bits):.1f}%).")

    packing = zipper.compress(bits)
    print(f"The compressed text is encoded in {len(packing)} bytes.")
    print(f"The savings is {len(text) - len(packing)} bytes ({percent(len(text) - len(packing), len(text)):.1f}%).")

    unpacking = zipper.decompress(packing)
    print(f"Decompressing yields {len(unpacking)} bits.")
    recovered = zipper.decode(unpacking)
    print(f"The recovered text has {len(recovered)} characters.")

    ok = recovered == text
    print("Round trip OK" if ok else "Round trip FAILED")
    return ok


# Synthetic dataset generators

PRINTABLE = string.ascii_letters + string.digits + string.punctuation + " \n"

def _sample_cdf(chars: str, weights: Sequence[float], size: int, rng: random.Random) -> str:
    total = sum(weights)
    cdf = []
    acc = 0.0
    for w in weights:
        acc += w / total
        cdf.append(acc)

    out = []
    for _ in range(size):
        r = rng.random()
        lo, hi = 0, len(cdf) - 1
        while lo < hi:
            mid = (lo + hi) // 2
            if r <= cdf[mid]:
                hi = mid
            else:
                lo = mid + 1
        out.append(chars[lo])
    return "".join(out)

def gen_uniform(size: int, alphabet: str = PRINTABLE, seed: int = 0) -> str:
    rng = random.Random(seed)
    return "".join(rng.choice(alphabet) for _ in range(size))

def gen_repetitive(size: int, dominant: str = "a", dom_frac: float = 0.90, seed: int = 0) -> str:
    rng = random.Random(seed)
    others = [ch for ch in PRINTABLE if ch != dominant]
    return "".join(dominant if rng.random() < dom_frac else rng.choice(others) for _ in range(size))

def gen_zipf_like(size: int, alphabet: int = 64, s: float = 1.2, seed: int = 0) -> str:
    rng = random.Random(seed)
    chars = PRINTABLE[:alphabet]
    weights = [1.0 / ((i + 1) ** s) for i in range(len(chars))]
    return _sample_cdf(chars, weights, size, rng)

def gen_english_like(size: int, seed: int = 0) -> str:
    rng = random.Random(seed)
    chars = " " + constants.ALPHABET + "\n"
    weights = [13.0] + list(constants.ENGLISH_LETTER_PERCENTS) + [1.5]
    return _sample_cdf(chars, weights, size, rng)

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], str]] = {
    "uniform": lambda size, seed: gen_uniform(size, seed=seed),
    "letters": lambda size, seed: gen_uniform(size, alphabet=constants.ALPHABET, seed=seed),
    "zipf64": lambda size, seed: gen_zipf_like(size, alphabet=64, s=1.2, seed=seed),
    "zipf26": lambda size, seed: gen_zipf_like(size, alphabet=26, s=1.2, seed=seed),
    "repetitive90": lambda size, seed: gen_repetitive(size, dom_frac=0.90, seed=seed),
    "repetitive99": lambda size, seed: gen_repetitive(size, dom_frac=0.99, seed=seed),
    "english_like": lambda size, seed: gen_english_like(size, seed=seed),
}

def generate_dataset(name: str, size_chars: int, seed: int) -> Tuple[str, str]:
    """
    Unknown dataset names fall back to uniform so one typo does not
    throw away the whole run. The returned name says so.
    """
    fn = GENERATOR_REGISTRY.get(name)
    if fn is None:
        return f"{name}_fallback_uniform", gen_uniform(size_chars, seed=seed)
    return name, fn(size_chars, seed)


# Experiment runner

@dataclass
class MetricRow:
    exp_name: str
    dataset_name: str
    text_chars: int
    coded_chars: int  # fewer than text_chars for the reference book
    run_id: int
    pipeline: str  # "optimized" or "reference"
    alphabet_size: int

    build_ms: float
    encode_ms: float
    compress_ms: float
    decompress_ms: float
    decode_ms: float
    total_ms: float

    encoded_bits: int
    packed_bytes: int
    bits_per_char: float
    weighted_average: float
    compression_ratio: float

    correctness_ok: int  # 1 or 0


def run_one(text: str, pipeline: str) -> MetricRow:
    text_chars = len(text)
    if pipeline == "reference":
        text = letters_only(text)
    elif pipeline != "optimized":
        raise ValueError("pipeline must be 'optimized' or 'reference'")

    build_ms = encode_ms = compress_ms = decompress_ms = decode_ms = 0.0
    alphabet_size = 0
    weighted_average = 0.0
    bits = ""
    packed = b""
    correctness_ok = 0

    try:
        t0 = now_ns()
        book = CodeBook(text) if pipeline == "optimized" else CodeBook()
        zipper = Zipper(book)
        t1 = now_ns()
        build_ms = ns_to_ms(t1 - t0)
        alphabet_size = book.size()
        weighted_average = book.get_weighted_average()

        t0 = now_ns()
        bits = zipper.encode(text)
        t1 = now_ns()
        packed = zipper.compress(bits)
        t2 = now_ns()
        unpacked = zipper.decompress(packed)
        t3 = now_ns()
        recovered = zipper.decode(unpacked)
        t4 = now_ns()

        encode_ms = ns_to_ms(t1 - t0)
        compress_ms = ns_to_ms(t2 - t1)
        decompress_ms = ns_to_ms(t3 - t2)
        decode_ms = ns_to_ms(t4 - t3)
        correctness_ok = 1 if (recovered == text and unpacked == bits) else 0
    except HuffmanError as e:
        print(f"[{pipeline}] {type(e).__name__}: {e}")

    return MetricRow(
        exp_name="",
        dataset_name="",
        text_chars=text_chars,
        coded_chars=len(text),
        run_id=0,
        pipeline=pipeline,
        alphabet_size=alphabet_size,
        build_ms=build_ms,
        encode_ms=encode_ms,
        compress_ms=compress_ms,
        decompress_ms=decompress_ms,
        decode_ms=decode_ms,
        total_ms=build_ms + encode_ms + compress_ms + decompress_ms + decode_ms,
        encoded_bits=len(bits),
        packed_bytes=len(packed),
        bits_per_char=len(bits) / max(1, len(text)),
        weighted_average=weighted_average,
        compression_ratio=len(packed) / max(1, len(text)),
        correctness_ok=correctness_ok,
    )


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    names = [f.name for f in fields(MetricRow)]
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=names)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in names})


SUMMARY_METRICS = (
    "compression_ratio", "bits_per_char", "weighted_average",
    "build_ms", "encode_ms", "decode_ms", "total_ms",
)

def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)

def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by exp_name, dataset_name, text_chars, pipeline and compute mean/stdev
    """
    key_to: Dict[Tuple[str, str, int, str], List[MetricRow]] = {}
    for r in rows:
        key = (r.exp_name, r.dataset_name, r.text_chars, r.pipeline)
        key_to.setdefault(key, []).append(r)

    summary_fields = ["exp_name", "dataset_name", "text_chars", "pipeline", "n_runs"]
    for m in SUMMARY_METRICS:
        summary_fields += [f"{m}_mean", f"{m}_stdev"]
    summary_fields.append("correctness_ok_rate")

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=summary_fields)
        w.writeheader()
        for key, items in sorted(key_to.items()):
            exp_name, dataset_name, size_c, pipeline = key
            row = {
                "exp_name": exp_name,
                "dataset_name": dataset_name,
                "text_chars": size_c,
                "pipeline": pipeline,
                "n_runs": len(items),
                "correctness_ok_rate": sum(x.correctness_ok for x in items) / len(items),
            }
            for m in SUMMARY_METRICS:
                row[f"{m}_mean"], row[f"{m}_stdev"] = mean_stdev([getattr(x, m) for x in items])
            w.writerow(row)


# Plotting

def _mean_of(rows: List[MetricRow], field: str) -> float:
    vals = [getattr(r, field) for r in rows]
    return statistics.mean(vals) if vals else float("nan")

def _plot_by_dataset(exp_rows: List[MetricRow], field: str, ylabel: str, title: str, path: Path) -> None:
    datasets = sorted(set(r.dataset_name for r in exp_rows))
    x = list(range(len(datasets)))

    plt.figure()
    for p in PIPELINES:
        y = [_mean_of([r for r in exp_rows if r.dataset_name == d and r.pipeline == p], field) for d in datasets]
        plt.plot(x, y, marker="o", label=p)
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel(ylabel)
    plt.title(title)
    plt.legend()
    plt.tight_layout()
    plt.savefig(path, dpi=200)
    plt.close()

def plot_experiment_1(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp1_distribution"]
    if not exp_rows:
        return
    _plot_by_dataset(exp_rows, "bits_per_char", "Encoded Bits / Character",
                     "Experiment 1: Bits per Character by Distribution",
                     outdir / "exp1_bits_per_char.png")
    _plot_by_dataset(exp_rows, "compression_ratio", "Packed Bytes / Original Characters",
                     "Experiment 1: Compression Ratio by Distribution",
                     outdir / "exp1_compression_ratio.png")
    _plot_by_dataset(exp_rows, "total_ms", "Total Time (ms) (build + encode + pack + unpack + decode)",
                     "Experiment 1: Total Runtime by Distribution",
                     outdir / "exp1_total_time.png")

def plot_experiment_2(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp2_size_scaling"]
    if not exp_rows:
        return

    for dist in sorted(set(r.dataset_name for r in exp_rows)):
        dist_rows = [r for r in exp_rows if r.dataset_name == dist]
        sizes = sorted(set(r.text_chars for r in dist_rows))

        plt.figure()
        for field, label in (("encode_ms", "encode"), ("decode_ms", "decode"),
                             ("compress_ms", "pack"), ("decompress_ms", "unpack")):
            y = [_mean_of([r for r in dist_rows if r.text_chars == s], field) for s in sizes]
            plt.plot(sizes, y, marker="o", label=label)
        plt.xlabel("Text Size (characters)")
        plt.ylabel("Time (ms)")
        plt.title(f"Experiment 2: Coding Time vs Size ({dist})")
        plt.legend()
        plt.tight_layout()
        plt.savefig(outdir / f"exp2_time_{dist}.png", dpi=200)
        plt.close()

        plt.figure()
        y = [_mean_of([r for r in dist_rows if r.text_chars == s], "compression_ratio") for s in sizes]
        plt.plot(sizes, y, marker="o")
        plt.xlabel("Text Size (characters)")
        plt.ylabel("Packed Bytes / Original Characters")
        plt.title(f"Experiment 2: Compression Ratio vs Size ({dist})")
        plt.tight_layout()
        plt.savefig(outdir / f"exp2_compression_ratio_{dist}.png", dpi=200)
        plt.close()

def plot_experiment_3(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp3_books"]
    if not exp_rows:
        return
    _plot_by_dataset(exp_rows, "weighted_average", "Average Code Length (bits)",
                     "Experiment 3: Average Code Length by Book",
                     outdir / "exp3_weighted_average.png")


# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def load_books(paths: Optional[List[str]]) -> List[Tuple[str, str]]:
    if paths is None:
        paths = [p for p in constants.BOOKS if Path(p).exists()]
    books = [(Path(p).stem, load_file(p)) for p in paths]
    if not books:
        books = [("sample", constants.SAMPLE_TEXT)]
    return books

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description=constants.TITLE)
    ap.add_argument("--books", nargs="*", default=None, help="Plain text files to report on (default: constants.BOOKS that exist)")
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=5, help="Repetitions per configuration (>=3 recommended for timing)")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")
    ap.add_argument("--no_plots", action="store_true", help="Skip the charts")

    # Experiment toggles
    ap.add_argument("--no_exp1", action="store_true", help="Disable experiment 1 (distribution)")
    ap.add_argument("--no_exp2", action="store_true", help="Disable experiment 2 (size scaling)")
    ap.add_argument("--no_exp3", action="store_true", help="Disable experiment 3 (books)")

    # Experiment 1 controls
    ap.add_argument("--exp1_size_kb", type=int, default=64, help="Experiment 1 fixed text size in K characters")
    ap.add_argument("--exp1_generators", type=str, default="uniform,zipf64,repetitive90,english_like",
                    help="Comma-separated dataset generator names for experiment 1")

    # Experiment 2 controls
    ap.add_argument("--exp2_min_kb", type=int, default=1, help="Experiment 2 min size in K characters (power-of-two growth)")
    ap.add_argument("--exp2_max_kb", type=int, default=256, help="Experiment 2 max size in K characters (power-of-two growth)")
    ap.add_argument("--exp2_generators", type=str, default="english_like,zipf64",
                    help="Comma-separated dataset generator names for experiment 2")

    args = ap.parse_args(argv)

    print(constants.TITLE)
    books = load_books(args.books)
    reports_ok = True
    for name, text in books:
        try:
            reports_ok = print_report(name, text) and reports_ok
        except HuffmanError as e:
            print(f"{type(e).__name__}: {e}")
            reports_ok = False

    outdir = Path(args.outdir)
    safe_mkdir(outdir)

    rows: List[MetricRow] = []

    # Experiment 1: distributions (fixed size)
    if not args.no_exp1:
        fixed_size = max(1, args.exp1_size_kb) * 1024
        for gen_name in parse_csv_list(args.exp1_generators):
            for run_id in range(1, args.runs + 1):
                dataset_name, text = generate_dataset(gen_name, fixed_size, args.seed + run_id)
                for pipeline in PIPELINES:
                    row = run_one(text, pipeline)
                    row.exp_name = "exp1_distribution"
                    row.dataset_name = dataset_name
                    row.run_id = run_id
                    rows.append(row)

    # Experiment 2: size scaling (powers of 2), optimized book only
    if not args.no_exp2:
        sizes: List[int] = []
        s = max(1, args.exp2_min_kb) * 1024
        while s <= max(1, args.exp2_max_kb) * 1024:
            sizes.append(s)
            s *= 2

        for gen_name in parse_csv_list(args.exp2_generators):
            for size_c in sizes:
                for run_id in range(1, args.runs + 1):
                    dataset_name, text = generate_dataset(gen_name, size_c, args.seed + 10_000 + size_c + run_id)
                    row = run_one(text, "optimized")
                    row.exp_name = "exp2_size_scaling"
                    row.dataset_name = dataset_name
                    row.run_id = run_id
                    rows.append(row)

    # Experiment 3: the books themselves, both code books
    if not args.no_exp3:
        for name, text in books:
            for run_id in range(1, args.runs + 1):
                for pipeline in PIPELINES:
                    row = run_one(text, pipeline)
                    row.exp_name = "exp3_books"
                    row.dataset_name = name
                    row.run_id = run_id
                    rows.append(row)

    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    if not args.no_plots:
        plot_experiment_1(rows, outdir)
        plot_experiment_2(rows, outdir)
        plot_experiment_3(rows, outdir)

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print()
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Correctness rate across all runs: {ok_rate:.3f}")
    if not args.no_plots:
        print("Charts saved in:", outdir.resolve())
    return 0 if reports_ok and all(r.correctness_ok for r in rows) else 1


if __name__ == "__main__":
    raise SystemExit(main())
