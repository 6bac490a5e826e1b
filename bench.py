"""Benchmark incremental BPE training on a Hugging Face text dataset."""

import argparse
import logging
import time

from bytemerge import BPETrainer, TrainerConfig, disable_progress
from datasets import load_dataset

# Configure logging to show INFO level and above.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)


def format_bytes(num_bytes: int) -> str:
    """Format bytes to human-readable string."""
    size = float(num_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} TB"


def benchmark_training(dataset: str, rows: int, max_merges: int) -> None:
    """Train on ``rows`` rows of ``dataset`` and print compression statistics."""

    print("=" * 70)
    print("BPE TRAINING BENCHMARK")
    print("=" * 70)

    print("\nLoading dataset...")
    ds = load_dataset(dataset, split="train")
    data = "".join(ds[:rows]["text"]).encode("utf-8")
    print(f"   Input size: {format_bytes(len(data))}")

    disable_progress()
    trainer = BPETrainer(TrainerConfig(max_merges=max_merges))

    print(f"\nTraining (max_merges={max_merges})...")
    start = time.perf_counter()
    result = trainer.train(data)
    elapsed = time.perf_counter() - start

    print(f"   Training completed in {elapsed:.3f}s ({result.stop_reason.value})")
    print(f"   Merges created: {result.n_merges_completed:,}")
    print(f"   Final vocab size: {len(result.vocab):,}")

    # Verify the tokens still spell out the input.
    assert result.vocab.expand_all(result.tokens) == data, "Round trip failed"
    print("   Round trip verified: expansions match input")

    print("\nCompression Statistics:")
    ratio = len(data) / max(1, len(result.tokens))
    print(f"   Original symbols (bytes): {len(data):,}")
    print(f"   Final tokens: {len(result.tokens):,}")
    print(f"   Compression ratio: {ratio:.2f}x")
    print("\n" + "=" * 70)


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--dataset", default="stevez80/Sci-Fi-Books-gutenberg")
    ap.add_argument("--rows", type=int, default=200)
    ap.add_argument("--max-merges", type=int, default=5_000)
    args = ap.parse_args()
    benchmark_training(args.dataset, args.rows, args.max_merges)
